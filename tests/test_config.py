import dataclasses

import pytest

from sctpchunks.config import (
    COMMON_HEADER_SIZE,
    DATA_CHUNK_HEADER_SIZE,
    DEFAULT_MAX_MESSAGE_SIZE,
    INITIAL_MTU,
    INITIAL_RECV_BUF_SIZE,
    ClientConfig,
    EndpointConfig,
    ServerConfig,
    TransportConfig,
)


def test_transport_defaults():
    cfg = TransportConfig()
    assert cfg.max_message_size == 65536
    assert cfg.max_receive_buffer_size == INITIAL_RECV_BUF_SIZE
    assert cfg.max_num_outbound_streams == cfg.max_num_inbound_streams


def test_transport_replace_leaves_original():
    base = TransportConfig()
    custom = dataclasses.replace(base, max_message_size=30000)
    assert custom.max_message_size == 30000
    assert base.max_message_size == DEFAULT_MAX_MESSAGE_SIZE
    assert custom.max_receive_buffer_size == base.max_receive_buffer_size


def test_transport_is_immutable():
    cfg = TransportConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.max_message_size = 1
    assert cfg.max_message_size == DEFAULT_MAX_MESSAGE_SIZE


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_num_outbound_streams": 65536},
        {"max_num_inbound_streams": -1},
        {"max_message_size": 1 << 32},
        {"max_receive_buffer_size": -5},
    ],
)
def test_transport_rejects_out_of_range(kwargs):
    with pytest.raises(ValueError):
        TransportConfig(**kwargs)


def test_endpoint_default_payload_size():
    cfg = EndpointConfig()
    assert cfg.max_payload_size == INITIAL_MTU - COMMON_HEADER_SIZE - DATA_CHUNK_HEADER_SIZE
    assert cfg.aid_generator_factory is None


def test_endpoint_custom_factory_is_kept():
    cfg = EndpointConfig(aid_generator_factory=lambda: "generator")
    assert cfg.aid_generator_factory() == "generator"


def test_endpoint_repr_elides_factory():
    cfg = EndpointConfig(max_payload_size=9000, aid_generator_factory=lambda: None)
    assert repr(cfg) == "EndpointConfig(max_payload_size=9000, aid_generator_factory=[ elided ])"


def test_endpoint_rejects_negative_payload():
    with pytest.raises(ValueError):
        EndpointConfig(max_payload_size=-1)


def test_server_defaults():
    cfg = ServerConfig()
    assert cfg.concurrent_associations == 100_000
    assert cfg.transport == TransportConfig()


def test_client_and_server_transports_are_separate_instances():
    a, b = ClientConfig(), ClientConfig()
    assert a.transport == b.transport
    assert a.transport is not b.transport
    custom = ClientConfig(transport=TransportConfig(max_message_size=30000))
    assert custom.transport.max_message_size == 30000