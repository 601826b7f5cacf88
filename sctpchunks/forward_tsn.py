"""FORWARD-TSN chunk: moves the peer's cumulative TSN point forward."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from sctpchunks.chunk import CHUNK_HEADER_SIZE, Chunk, ChunkHeader, SctpError
from sctpchunks.chunk_type import CT_FORWARD_TSN

NEW_CUMULATIVE_TSN_LENGTH = 4
FORWARD_TSN_STREAM_LENGTH = 4

_U32 = struct.Struct("!I")
_STREAM = struct.Struct("!HH")


@dataclass
class ChunkForwardTsnStream:
    """A skipped stream and the largest sequence number skipped on it."""

    identifier: int = 0
    sequence: int = 0

    @classmethod
    def unmarshal(cls, buf: bytes) -> ChunkForwardTsnStream:
        if len(buf) < FORWARD_TSN_STREAM_LENGTH:
            raise SctpError("chunk too short")
        identifier, sequence = _STREAM.unpack_from(buf)
        return cls(identifier, sequence)

    def marshal(self) -> bytes:
        return _STREAM.pack(self.identifier, self.sequence)

    def value_length(self) -> int:
        return FORWARD_TSN_STREAM_LENGTH

    def __str__(self) -> str:
        return f"{self.identifier}, {self.sequence}"


@dataclass
class ChunkForwardTsn(Chunk):
    """FORWARD-TSN chunk: a new cumulative TSN and the streams it skips."""

    new_cumulative_tsn: int = 0
    streams: list[ChunkForwardTsnStream] = field(default_factory=list)

    def header(self) -> ChunkHeader:
        return ChunkHeader(CT_FORWARD_TSN, 0, self.value_length())

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkForwardTsn:
        header = ChunkHeader.unmarshal(raw)
        if header.typ != CT_FORWARD_TSN:
            raise SctpError("ChunkType is not of type ForwardTsn")

        offset = CHUNK_HEADER_SIZE + NEW_CUMULATIVE_TSN_LENGTH
        if len(raw) < offset or header.value_length < NEW_CUMULATIVE_TSN_LENGTH:
            raise SctpError("chunk too short")

        end = CHUNK_HEADER_SIZE + header.value_length
        (new_cumulative_tsn,) = _U32.unpack_from(raw, CHUNK_HEADER_SIZE)

        streams = []
        while offset < len(raw):
            stream = ChunkForwardTsnStream.unmarshal(raw[offset:end])
            offset += stream.value_length()
            streams.append(stream)

        return cls(new_cumulative_tsn, streams)

    def _marshal_value(self) -> bytes:
        return _U32.pack(self.new_cumulative_tsn) + b"".join(
            stream.marshal() for stream in self.streams
        )

    def value_length(self) -> int:
        return NEW_CUMULATIVE_TSN_LENGTH + FORWARD_TSN_STREAM_LENGTH * len(self.streams)

    def __str__(self) -> str:
        lines = [str(self.header()), f"New Cumulative TSN: {self.new_cumulative_tsn}"]
        lines.extend(f" - si={s.identifier}, ssn={s.sequence}" for s in self.streams)
        return "\n".join(lines)