"""Transport, endpoint, server and client configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

RECEIVE_MTU = 8192  # MTU for inbound packets
INITIAL_MTU = 1228  # initial MTU for outgoing packets
INITIAL_RECV_BUF_SIZE = 1024 * 1024
COMMON_HEADER_SIZE = 12
DATA_CHUNK_HEADER_SIZE = 16
DEFAULT_MAX_MESSAGE_SIZE = 65536

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF


def _check_range(name: str, value: int, upper: int) -> None:
    if not 0 <= value <= upper:
        raise ValueError(f"{name} out of range: {value}")


@dataclass(frozen=True)
class TransportConfig:
    """Per-association transport limits; derive variants with dataclasses.replace."""

    max_receive_buffer_size: int = INITIAL_RECV_BUF_SIZE
    max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE
    max_num_outbound_streams: int = _U16_MAX
    max_num_inbound_streams: int = _U16_MAX

    def __post_init__(self) -> None:
        _check_range("max_receive_buffer_size", self.max_receive_buffer_size, _U32_MAX)
        _check_range("max_message_size", self.max_message_size, _U32_MAX)
        _check_range("max_num_outbound_streams", self.max_num_outbound_streams, _U16_MAX)
        _check_range("max_num_inbound_streams", self.max_num_inbound_streams, _U16_MAX)


@dataclass
class EndpointConfig:
    """Endpoint-wide settings shared by all associations.

    ``aid_generator_factory`` is called once per endpoint to obtain the
    association-id generator; ``None`` selects the endpoint's default.
    """

    max_payload_size: int = INITIAL_MTU - (COMMON_HEADER_SIZE + DATA_CHUNK_HEADER_SIZE)
    aid_generator_factory: Optional[Callable[[], Any]] = None

    def __post_init__(self) -> None:
        _check_range("max_payload_size", self.max_payload_size, _U32_MAX)

    def __repr__(self) -> str:
        return (
            f"EndpointConfig(max_payload_size={self.max_payload_size}, "
            "aid_generator_factory=[ elided ])"
        )


@dataclass
class ServerConfig:
    """Settings for incoming associations."""

    transport: TransportConfig = field(default_factory=TransportConfig)
    concurrent_associations: int = 100_000


@dataclass
class ClientConfig:
    """Settings for outgoing associations."""

    transport: TransportConfig = field(default_factory=TransportConfig)