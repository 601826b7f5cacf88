import pytest

from sctpchunks.chunk import SctpError
from sctpchunks.chunk_type import CT_SACK
from sctpchunks.selective_ack import ChunkSelectiveAck, GapAckBlock

SACK_CHUNK = bytes(
    [
        0x03, 0x00, 0x00, 0x14, 0x87, 0x73, 0xBD, 0xA4, 0x00, 0x01, 0xFE, 0x74,
        0x00, 0x01, 0x00, 0x00, 0x00, 0x02, 0x00, 0x02,
    ]
)

DATA_CHUNK_HEAD = bytes(
    [0x00, 0x07, 0x00, 0x11, 0xA4, 0x50, 0x7B, 0xC5, 0x00, 0x01, 0x00, 0x00,
     0x00, 0x00, 0x00, 0x33, 0x7B, 0x00, 0x00, 0x00]
)


def test_unmarshal_captured_sack():
    sack = ChunkSelectiveAck.unmarshal(SACK_CHUNK)
    assert sack.header().typ == CT_SACK
    assert sack.gap_ack_blocks == [GapAckBlock(2, 2)]
    assert sack.duplicate_tsn == []


def test_round_trip_captured_sack():
    assert ChunkSelectiveAck.unmarshal(SACK_CHUNK).marshal() == SACK_CHUNK


def test_sack_followed_by_another_chunk():
    sack = ChunkSelectiveAck.unmarshal(SACK_CHUNK + DATA_CHUNK_HEAD)
    assert sack.marshal() == SACK_CHUNK


def test_round_trip_with_duplicates():
    original = ChunkSelectiveAck(
        cumulative_tsn_ack=100,
        advertised_receiver_window_credit=1500,
        gap_ack_blocks=[GapAckBlock(2, 3), GapAckBlock(5, 9)],
        duplicate_tsn=[98, 99],
    )
    raw = original.marshal()
    assert ChunkSelectiveAck.unmarshal(raw) == original
    assert original.value_length() == len(raw) - 4


def test_wrong_type_rejected():
    with pytest.raises(SctpError):
        ChunkSelectiveAck.unmarshal(bytes([0x04]) + SACK_CHUNK[1:])


def test_header_too_short():
    with pytest.raises(SctpError):
        ChunkSelectiveAck.unmarshal(bytes([0x03, 0x00, 0x00, 0x08, 0x00, 0x00, 0x00, 0x01]))


def test_counts_exceed_body():
    raw = bytearray(SACK_CHUNK)
    raw[15] = 0x01  # claim one duplicate TSN that is not present
    with pytest.raises(SctpError):
        ChunkSelectiveAck.unmarshal(bytes(raw))


def test_gap_ack_block_str():
    assert str(GapAckBlock(2, 7)) == "2 - 7"


def test_str():
    sack = ChunkSelectiveAck(1, 2, [GapAckBlock(4, 5)], [3])
    assert str(sack) == "SACK cumTsnAck=1 arwnd=2 dupTsn=[3]\n gap ack: 4 - 5"