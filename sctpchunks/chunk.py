"""Chunk header, chunk base class and error causes."""

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from sctpchunks.chunk_type import ChunkType

CHUNK_HEADER_SIZE = 4
ERROR_CAUSE_HEADER_LENGTH = 4

_HEADER = struct.Struct("!BBH")
_CAUSE_HEADER = struct.Struct("!HH")


class SctpError(Exception):
    """Raised when a chunk or one of its parts is malformed."""


@dataclass
class ChunkHeader:
    """Type, flags and length common to every chunk."""

    typ: ChunkType = field(default_factory=lambda: ChunkType(0))
    flags: int = 0
    value_length: int = 0

    @classmethod
    def unmarshal(cls, raw: bytes) -> ChunkHeader:
        if len(raw) < CHUNK_HEADER_SIZE:
            raise SctpError("raw is too small for a SCTP chunk")

        typ, flags, length = _HEADER.unpack_from(raw)
        if length < CHUNK_HEADER_SIZE:
            raise SctpError("channel length too small")

        length_after_value = len(raw) - length
        if length_after_value < 0:
            raise SctpError("not enough data left in SCTP packet to satisfy requested length")
        if length_after_value < 4:
            # Terminating padding is not counted in the length and must be zero.
            if any(raw[length:]):
                raise SctpError("chunk padding is non-zero at offset")

        return cls(ChunkType(typ), flags, length - CHUNK_HEADER_SIZE)

    def marshal(self) -> bytes:
        length = self.value_length + CHUNK_HEADER_SIZE
        if length > 0xFFFF:
            raise SctpError("chunk value too long")
        return _HEADER.pack(self.typ.value, self.flags, length)

    def __str__(self) -> str:
        return str(self.typ)


class Chunk(ABC):
    """Base class of all chunks: a header followed by a value."""

    @abstractmethod
    def header(self) -> ChunkHeader:
        """Build the header describing this chunk."""

    @classmethod
    @abstractmethod
    def unmarshal(cls, raw: bytes) -> Chunk:
        """Parse a chunk from its wire form."""

    @abstractmethod
    def value_length(self) -> int:
        """Length of the value, not counting the header or padding."""

    def _marshal_value(self) -> bytes:
        return b""

    def marshal(self) -> bytes:
        return self.header().marshal() + self._marshal_value()

    def check(self) -> None:
        """Validate the chunk's content; raises SctpError when invalid."""


@dataclass(frozen=True)
class ErrorCauseCode:
    """Cause code found in ERROR and ABORT chunks."""

    value: int

    def __str__(self) -> str:
        name = _CAUSE_NAMES.get(self.value)
        if name is None:
            return f"Unknown CauseCode: {self.value}"
        return name


INVALID_STREAM_IDENTIFIER = ErrorCauseCode(1)
MISSING_MANDATORY_PARAMETER = ErrorCauseCode(2)
STALE_COOKIE_ERROR = ErrorCauseCode(3)
OUT_OF_RESOURCE = ErrorCauseCode(4)
UNRESOLVABLE_ADDRESS = ErrorCauseCode(5)
UNRECOGNIZED_CHUNK_TYPE = ErrorCauseCode(6)
INVALID_MANDATORY_PARAMETER = ErrorCauseCode(7)
UNRECOGNIZED_PARAMETERS = ErrorCauseCode(8)
NO_USER_DATA = ErrorCauseCode(9)
COOKIE_RECEIVED_WHILE_SHUTTING_DOWN = ErrorCauseCode(10)
RESTART_OF_AN_ASSOCIATION_WITH_NEW_ADDRESSES = ErrorCauseCode(11)
USER_INITIATED_ABORT = ErrorCauseCode(12)
PROTOCOL_VIOLATION = ErrorCauseCode(13)

_CAUSE_NAMES = {
    1: "Invalid Stream Identifier",
    2: "Missing Mandatory Parameter",
    3: "Stale Cookie Error",
    4: "Out Of Resource",
    5: "Unresolvable IP",
    6: "Unrecognized Chunk Type",
    7: "Invalid Mandatory Parameter",
    8: "Unrecognized Parameters",
    9: "No User Data",
    10: "Cookie Received While Shutting Down",
    11: "Restart Of An Association With New Addresses",
    12: "User Initiated Abort",
    13: "Protocol Violation",
}


@dataclass
class ErrorCause:
    """An error cause: a code and opaque cause-specific data."""

    code: ErrorCauseCode = field(default_factory=lambda: ErrorCauseCode(0))
    raw: bytes = b""

    @classmethod
    def unmarshal(cls, buf: bytes) -> ErrorCause:
        if len(buf) < ERROR_CAUSE_HEADER_LENGTH:
            raise SctpError("error cause too small")
        code, length = _CAUSE_HEADER.unpack_from(buf)
        if length < ERROR_CAUSE_HEADER_LENGTH or length > len(buf):
            raise SctpError("error cause too small")
        return cls(ErrorCauseCode(code), bytes(buf[ERROR_CAUSE_HEADER_LENGTH:length]))

    def marshal(self) -> bytes:
        return _CAUSE_HEADER.pack(self.code.value, self.length()) + bytes(self.raw)

    def length(self) -> int:
        return len(self.raw) + ERROR_CAUSE_HEADER_LENGTH

    def __str__(self) -> str:
        return str(self.code)