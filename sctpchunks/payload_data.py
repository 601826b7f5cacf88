"""DATA chunk and payload protocol identifiers."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from sctpchunks.chunk import CHUNK_HEADER_SIZE, Chunk, ChunkHeader, SctpError
from sctpchunks.chunk_type import CT_PAYLOAD_DATA

PAYLOAD_DATA_ENDING_FRAGMENT_BITMASK = 1
PAYLOAD_DATA_BEGINNING_FRAGMENT_BITMASK = 2
PAYLOAD_DATA_UNORDERED_BITMASK = 4
PAYLOAD_DATA_IMMEDIATE_SACK = 8
PAYLOAD_DATA_HEADER_SIZE = 12

_DATA_HEADER = struct.Struct("!IHHI")


class PayloadProtocolIdentifier(IntEnum):
    """Payload types used by data channels."""

    DCEP = 50
    STRING = 51
    BINARY = 53
    STRING_EMPTY = 56
    BINARY_EMPTY = 57
    UNKNOWN = 58

    @classmethod
    def from_value(cls, value: int) -> PayloadProtocolIdentifier:
        """Map a wire value to an identifier; unrecognised values become UNKNOWN."""
        try:
            member = cls(value)
        except ValueError:
            return cls.UNKNOWN
        return member

    def __str__(self) -> str:
        return _PPI_NAMES.get(self, "Unknown Payload Protocol Identifier")


_PPI_NAMES = {
    PayloadProtocolIdentifier.DCEP: "WebRTC DCEP",
    PayloadProtocolIdentifier.STRING: "WebRTC String",
    PayloadProtocolIdentifier.BINARY: "WebRTC Binary",
    PayloadProtocolIdentifier.STRING_EMPTY: "WebRTC String (Empty)",
    PayloadProtocolIdentifier.BINARY_EMPTY: "WebRTC Binary (Empty)",
}


@dataclass
class ChunkPayloadData(Chunk):
    """DATA chunk carrying a fragment of a user message, plus sender-side state."""

    unordered: bool = False
    beginning_fragment: bool = False
    ending_fragment: bool = False
    immediate_sack: bool = False

    tsn: int = 0
    stream_identifier: int = 0
    stream_sequence_number: int = 0
    payload_type: PayloadProtocolIdentifier = PayloadProtocolIdentifier.UNKNOWN
    user_data: bytes = b""

    acked: bool = False
    miss_indicator: int = 0

    since: Optional[float] = None
    nsent: int = 0

    # Valid only on the first fragment.
    abandoned: bool = False
    all_inflight: bool = False

    retransmit: bool = False

    def header(self) -> ChunkHeader:
        flags = 0
        if self.ending_fragment:
            flags |= PAYLOAD_DATA_ENDING_FRAGMENT_BITMASK
        if self.beginning_fragment:
            flags |= PAYLOAD_DATA_BEGINNING_FRAGMENT_BITMASK
        if self.unordered:
            flags |= PAYLOAD_DATA_UNORDERED_BITMASK
        if self.immediate_sack:
            flags |= PAYLOAD_DATA_IMMEDIATE_SACK
        return ChunkHeader(CT_PAYLOAD_DATA, flags, self.value_length())

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkPayloadData:
        header = ChunkHeader.unmarshal(raw)
        if header.typ != CT_PAYLOAD_DATA:
            raise SctpError("ChunkType is not of type PayloadData")

        if len(raw) < PAYLOAD_DATA_HEADER_SIZE or header.value_length < PAYLOAD_DATA_HEADER_SIZE:
            raise SctpError("packet is smaller than the header size")

        flags = header.flags
        tsn, stream_identifier, stream_sequence_number, ppi = _DATA_HEADER.unpack_from(
            raw, CHUNK_HEADER_SIZE
        )
        end = CHUNK_HEADER_SIZE + header.value_length
        return cls(
            unordered=bool(flags & PAYLOAD_DATA_UNORDERED_BITMASK),
            beginning_fragment=bool(flags & PAYLOAD_DATA_BEGINNING_FRAGMENT_BITMASK),
            ending_fragment=bool(flags & PAYLOAD_DATA_ENDING_FRAGMENT_BITMASK),
            immediate_sack=bool(flags & PAYLOAD_DATA_IMMEDIATE_SACK),
            tsn=tsn,
            stream_identifier=stream_identifier,
            stream_sequence_number=stream_sequence_number,
            payload_type=PayloadProtocolIdentifier.from_value(ppi),
            user_data=bytes(raw[CHUNK_HEADER_SIZE + PAYLOAD_DATA_HEADER_SIZE : end]),
        )

    def _marshal_value(self) -> bytes:
        return (
            _DATA_HEADER.pack(
                self.tsn,
                self.stream_identifier,
                self.stream_sequence_number,
                int(self.payload_type),
            )
            + bytes(self.user_data)
        )

    def value_length(self) -> int:
        return PAYLOAD_DATA_HEADER_SIZE + len(self.user_data)

    def is_abandoned(self) -> bool:
        """True once the message is abandoned and all its fragments are in flight."""
        return self.abandoned and self.all_inflight

    def set_all_inflight(self) -> None:
        if self.ending_fragment:
            self.all_inflight = True

    def __str__(self) -> str:
        return f"{self.header()}\n{self.tsn}"