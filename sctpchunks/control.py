"""Control chunks: ABORT, ERROR, COOKIE-ECHO, COOKIE-ACK and the SHUTDOWN family."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from sctpchunks.chunk import CHUNK_HEADER_SIZE, Chunk, ChunkHeader, ErrorCause, SctpError
from sctpchunks.chunk_type import (
    CT_ABORT,
    CT_COOKIE_ACK,
    CT_COOKIE_ECHO,
    CT_ERROR,
    CT_SHUTDOWN,
    CT_SHUTDOWN_ACK,
    CT_SHUTDOWN_COMPLETE,
    ChunkType,
)

CUMULATIVE_TSN_ACK_LENGTH = 4

_U32 = struct.Struct("!I")


def _expect_header(raw: bytes, expected: ChunkType, message: str) -> ChunkHeader:
    header = ChunkHeader.unmarshal(raw)
    if header.typ != expected:
        raise SctpError(message)
    return header


def _parse_error_causes(raw: bytes, header: ChunkHeader) -> list[ErrorCause]:
    end = CHUNK_HEADER_SIZE + header.value_length
    causes = []
    offset = CHUNK_HEADER_SIZE
    while offset + 4 <= len(raw):
        cause = ErrorCause.unmarshal(raw[offset:end])
        offset += cause.length()
        causes.append(cause)
    return causes


def _describe_causes(header: ChunkHeader, causes: list[ErrorCause]) -> str:
    return "\n".join([str(header), *(f" - {cause}" for cause in causes)])


@dataclass
class ChunkAbort(Chunk):
    """ABORT chunk: closes the association, optionally stating why."""

    error_causes: list[ErrorCause] = field(default_factory=list)

    def header(self) -> ChunkHeader:
        return ChunkHeader(CT_ABORT, 0, self.value_length())

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkAbort:
        header = _expect_header(raw, CT_ABORT, "ChunkType is not of type ABORT")
        return cls(_parse_error_causes(raw, header))

    def _marshal_value(self) -> bytes:
        return b"".join(cause.marshal() for cause in self.error_causes)

    def value_length(self) -> int:
        return sum(cause.length() for cause in self.error_causes)

    def __str__(self) -> str:
        return _describe_causes(self.header(), self.error_causes)


@dataclass
class ChunkError(Chunk):
    """ERROR chunk: reports one or more non-fatal error causes to the peer."""

    error_causes: list[ErrorCause] = field(default_factory=list)

    def header(self) -> ChunkHeader:
        return ChunkHeader(CT_ERROR, 0, self.value_length())

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkError:
        header = _expect_header(raw, CT_ERROR, "ChunkType is not of type ERROR")
        return cls(_parse_error_causes(raw, header))

    def _marshal_value(self) -> bytes:
        return b"".join(cause.marshal() for cause in self.error_causes)

    def value_length(self) -> int:
        return sum(cause.length() for cause in self.error_causes)

    def __str__(self) -> str:
        return _describe_causes(self.header(), self.error_causes)


@dataclass
class ChunkCookieAck(Chunk):
    """COOKIE-ACK chunk: carries no value."""

    def header(self) -> ChunkHeader:
        return ChunkHeader(CT_COOKIE_ACK, 0, self.value_length())

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkCookieAck:
        _expect_header(raw, CT_COOKIE_ACK, "ChunkType is not of type COOKIEACK")
        return cls()

    def value_length(self) -> int:
        return 0

    def __str__(self) -> str:
        return str(self.header())


@dataclass
class ChunkCookieEcho(Chunk):
    """COOKIE-ECHO chunk: returns the state cookie to its issuer."""

    cookie: bytes = b""

    def header(self) -> ChunkHeader:
        return ChunkHeader(CT_COOKIE_ECHO, 0, self.value_length())

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkCookieEcho:
        header = _expect_header(raw, CT_COOKIE_ECHO, "ChunkType is not of type COOKIEECHO")
        end = CHUNK_HEADER_SIZE + header.value_length
        return cls(bytes(raw[CHUNK_HEADER_SIZE:end]))

    def _marshal_value(self) -> bytes:
        return bytes(self.cookie)

    def value_length(self) -> int:
        return len(self.cookie)

    def __str__(self) -> str:
        return str(self.header())


@dataclass
class ChunkShutdown(Chunk):
    """SHUTDOWN chunk: starts a graceful close, acknowledging up to a TSN."""

    cumulative_tsn_ack: int = 0

    def header(self) -> ChunkHeader:
        return ChunkHeader(CT_SHUTDOWN, 0, self.value_length())

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkShutdown:
        _expect_header(raw, CT_SHUTDOWN, "ChunkType is not of type SHUTDOWN")
        if len(raw) != CHUNK_HEADER_SIZE + CUMULATIVE_TSN_ACK_LENGTH:
            raise SctpError("invalid chunk size")
        (cumulative_tsn_ack,) = _U32.unpack_from(raw, CHUNK_HEADER_SIZE)
        return cls(cumulative_tsn_ack)

    def _marshal_value(self) -> bytes:
        return _U32.pack(self.cumulative_tsn_ack)

    def value_length(self) -> int:
        return CUMULATIVE_TSN_ACK_LENGTH

    def __str__(self) -> str:
        return str(self.header())


@dataclass
class ChunkShutdownAck(Chunk):
    """SHUTDOWN-ACK chunk: carries no value."""

    def header(self) -> ChunkHeader:
        return ChunkHeader(CT_SHUTDOWN_ACK, 0, self.value_length())

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkShutdownAck:
        _expect_header(raw, CT_SHUTDOWN_ACK, "ChunkType is not of type SHUTDOWN-ACK")
        return cls()

    def value_length(self) -> int:
        return 0

    def __str__(self) -> str:
        return str(self.header())


@dataclass
class ChunkShutdownComplete(Chunk):
    """SHUTDOWN-COMPLETE chunk: carries no value."""

    def header(self) -> ChunkHeader:
        return ChunkHeader(CT_SHUTDOWN_COMPLETE, 0, self.value_length())

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkShutdownComplete:
        _expect_header(
            raw, CT_SHUTDOWN_COMPLETE, "ChunkType is not of type SHUTDOWN-COMPLETE"
        )
        return cls()

    def value_length(self) -> int:
        return 0

    def __str__(self) -> str:
        return str(self.header())