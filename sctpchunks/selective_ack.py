"""SACK chunk: acknowledges received DATA and reports gaps and duplicates."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from sctpchunks.chunk import CHUNK_HEADER_SIZE, Chunk, ChunkHeader, SctpError
from sctpchunks.chunk_type import CT_SACK

SELECTIVE_ACK_HEADER_SIZE = 12

_SACK_HEADER = struct.Struct("!IIHH")
_GAP = struct.Struct("!HH")
_U32 = struct.Struct("!I")


@dataclass
class GapAckBlock:
    """A run of received TSNs, as offsets from the cumulative TSN ack."""

    start: int = 0
    end: int = 0

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


@dataclass
class ChunkSelectiveAck(Chunk):
    """SACK chunk."""

    cumulative_tsn_ack: int = 0
    advertised_receiver_window_credit: int = 0
    gap_ack_blocks: list[GapAckBlock] = field(default_factory=list)
    duplicate_tsn: list[int] = field(default_factory=list)

    def header(self) -> ChunkHeader:
        return ChunkHeader(CT_SACK, 0, self.value_length())

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkSelectiveAck:
        header = ChunkHeader.unmarshal(raw)
        if header.typ != CT_SACK:
            raise SctpError("ChunkType is not of type SACK")

        if len(raw) < CHUNK_HEADER_SIZE + SELECTIVE_ACK_HEADER_SIZE:
            raise SctpError("SACK Chunk size is not large enough to contain header")

        cumulative_tsn_ack, arwnd, gap_count, dup_count = _SACK_HEADER.unpack_from(
            raw, CHUNK_HEADER_SIZE
        )

        # Another chunk may follow in the buffer, so only a lower bound is checked
        # against the buffer; the declared length must still hold the whole body.
        needed = SELECTIVE_ACK_HEADER_SIZE + 4 * gap_count + 4 * dup_count
        if len(raw) < CHUNK_HEADER_SIZE + needed or header.value_length < needed:
            raise SctpError("SACK Chunk size is not large enough to contain header")

        offset = CHUNK_HEADER_SIZE + SELECTIVE_ACK_HEADER_SIZE
        gap_ack_blocks = [
            GapAckBlock(*_GAP.unpack_from(raw, offset + 4 * i)) for i in range(gap_count)
        ]
        offset += 4 * gap_count
        duplicate_tsn = [_U32.unpack_from(raw, offset + 4 * i)[0] for i in range(dup_count)]

        return cls(cumulative_tsn_ack, arwnd, gap_ack_blocks, duplicate_tsn)

    def _marshal_value(self) -> bytes:
        parts = [
            _SACK_HEADER.pack(
                self.cumulative_tsn_ack,
                self.advertised_receiver_window_credit,
                len(self.gap_ack_blocks),
                len(self.duplicate_tsn),
            )
        ]
        parts.extend(_GAP.pack(g.start, g.end) for g in self.gap_ack_blocks)
        parts.extend(_U32.pack(t) for t in self.duplicate_tsn)
        return b"".join(parts)

    def value_length(self) -> int:
        return (
            SELECTIVE_ACK_HEADER_SIZE
            + 4 * len(self.gap_ack_blocks)
            + 4 * len(self.duplicate_tsn)
        )

    def __str__(self) -> str:
        res = (
            f"SACK cumTsnAck={self.cumulative_tsn_ack} "
            f"arwnd={self.advertised_receiver_window_credit} "
            f"dupTsn={list(self.duplicate_tsn)}"
        )
        return res + "".join(f"\n gap ack: {gap}" for gap in self.gap_ack_blocks)