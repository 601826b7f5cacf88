import pytest

from sctpchunks.chunk import SctpError
from sctpchunks.chunk_type import CT_PAYLOAD_DATA
from sctpchunks.payload_data import ChunkPayloadData, PayloadProtocolIdentifier

# DATA chunk following a SACK in a captured packet; one byte of padding at the end.
DATA_CHUNK = bytes(
    [
        0x00, 0x07, 0x00, 0x3B, 0xA4, 0x50, 0x7B, 0xC5, 0x00, 0x01, 0x00, 0x00, 0x00, 0x00,
        0x00, 0x33, 0x7B, 0x22, 0x65, 0x76, 0x65, 0x6E, 0x74, 0x22, 0x3A, 0x22, 0x72, 0x65,
        0x73, 0x69, 0x7A, 0x65, 0x22, 0x2C, 0x22, 0x77, 0x69, 0x64, 0x74, 0x68, 0x22, 0x3A,
        0x36, 0x36, 0x35, 0x2C, 0x22, 0x68, 0x65, 0x69, 0x67, 0x68, 0x74, 0x22, 0x3A, 0x34,
        0x39, 0x39, 0x7D, 0x00,
    ]
)


def test_unmarshal_captured_chunk():
    chunk = ChunkPayloadData.unmarshal(DATA_CHUNK)
    assert chunk.header().typ == CT_PAYLOAD_DATA
    assert chunk.unordered and chunk.beginning_fragment and chunk.ending_fragment
    assert not chunk.immediate_sack
    assert chunk.payload_type is PayloadProtocolIdentifier.STRING
    assert chunk.user_data == b'{"event":"resize","width":665,"height":499}'


def test_marshal_drops_terminating_padding():
    chunk = ChunkPayloadData.unmarshal(DATA_CHUNK)
    assert chunk.marshal() == DATA_CHUNK[:-1]


def test_round_trip_all_flags():
    original = ChunkPayloadData(
        unordered=True,
        beginning_fragment=False,
        ending_fragment=True,
        immediate_sack=True,
        tsn=10,
        stream_identifier=1,
        stream_sequence_number=2,
        payload_type=PayloadProtocolIdentifier.BINARY,
        user_data=b"ABC",
    )
    parsed = ChunkPayloadData.unmarshal(original.marshal())
    assert parsed == original


def test_header_flags_pinned():
    chunk = ChunkPayloadData(beginning_fragment=True, ending_fragment=True)
    assert chunk.header().flags == 3


def test_value_length_matches_marshal():
    chunk = ChunkPayloadData(tsn=5, user_data=b"hello")
    assert chunk.value_length() == len(chunk.marshal()) - 4


def test_wrong_type_rejected():
    raw = bytes([0x03]) + DATA_CHUNK[1:]
    with pytest.raises(SctpError):
        ChunkPayloadData.unmarshal(raw)


def test_too_short_rejected():
    with pytest.raises(SctpError):
        ChunkPayloadData.unmarshal(bytes([0x00, 0x03, 0x00, 0x08, 0x00, 0x00, 0x00, 0x01]))


@pytest.mark.parametrize(
    "ppi, text",
    [
        (PayloadProtocolIdentifier.DCEP, "WebRTC DCEP"),
        (PayloadProtocolIdentifier.STRING, "WebRTC String"),
        (PayloadProtocolIdentifier.BINARY, "WebRTC Binary"),
        (PayloadProtocolIdentifier.STRING_EMPTY, "WebRTC String (Empty)"),
        (PayloadProtocolIdentifier.BINARY_EMPTY, "WebRTC Binary (Empty)"),
        (PayloadProtocolIdentifier.UNKNOWN, "Unknown Payload Protocol Identifier"),
    ],
)
def test_ppi_str(ppi, text):
    assert str(ppi) == text


def test_ppi_from_value():
    assert PayloadProtocolIdentifier.from_value(50) is PayloadProtocolIdentifier.DCEP
    assert PayloadProtocolIdentifier.from_value(57) is PayloadProtocolIdentifier.BINARY_EMPTY
    assert PayloadProtocolIdentifier.from_value(52) is PayloadProtocolIdentifier.UNKNOWN


def test_unrecognised_ppi_parses_as_unknown():
    raw = bytearray(DATA_CHUNK)
    raw[15] = 0x34
    chunk = ChunkPayloadData.unmarshal(bytes(raw))
    assert chunk.payload_type is PayloadProtocolIdentifier.UNKNOWN


def test_abandoned_requires_all_inflight():
    chunk = ChunkPayloadData(ending_fragment=True, abandoned=True)
    assert chunk.is_abandoned() is False
    chunk.set_all_inflight()
    assert chunk.is_abandoned() is True


def test_set_all_inflight_ignored_without_ending_fragment():
    chunk = ChunkPayloadData(abandoned=True)
    chunk.set_all_inflight()
    assert chunk.all_inflight is False
    assert chunk.is_abandoned() is False


def test_str():
    chunk = ChunkPayloadData(tsn=10)
    assert str(chunk) == "DATA\n10"