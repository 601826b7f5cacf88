"""SCTP chunk type identifiers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkType:
    """The one-byte Chunk Type field of an SCTP chunk."""

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"chunk type out of range: {self.value}")

    def __str__(self) -> str:
        name = _NAMES.get(self.value)
        if name is None:
            return f"Unknown ChunkType: {self.value}"
        return name


CT_PAYLOAD_DATA = ChunkType(0)
CT_INIT = ChunkType(1)
CT_INIT_ACK = ChunkType(2)
CT_SACK = ChunkType(3)
CT_HEARTBEAT = ChunkType(4)
CT_HEARTBEAT_ACK = ChunkType(5)
CT_ABORT = ChunkType(6)
CT_SHUTDOWN = ChunkType(7)
CT_SHUTDOWN_ACK = ChunkType(8)
CT_ERROR = ChunkType(9)
CT_COOKIE_ECHO = ChunkType(10)
CT_COOKIE_ACK = ChunkType(11)
CT_CWR = ChunkType(13)
CT_SHUTDOWN_COMPLETE = ChunkType(14)
CT_RECONFIG = ChunkType(130)
CT_FORWARD_TSN = ChunkType(192)

_NAMES = {
    0: "DATA",
    1: "INIT",
    2: "INIT-ACK",
    3: "SACK",
    4: "HEARTBEAT",
    5: "HEARTBEAT-ACK",
    6: "ABORT",
    7: "SHUTDOWN",
    8: "SHUTDOWN-ACK",
    9: "ERROR",
    10: "COOKIE-ECHO",
    11: "COOKIE-ACK",
    13: "ECNE",  # Explicit Congestion Notification Echo
    14: "SHUTDOWN-COMPLETE",
    130: "RECONFIG",
    192: "FORWARD-TSN",
}