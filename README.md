# sctpchunks

Encode and decode SCTP chunks (RFC 4960, RFC 3758), with the retransmission
timer logic and the configuration objects an SCTP association uses.
Pure Python, no dependencies.

## Modules

- `sctpchunks.chunk_type` — `ChunkType`, the one-byte chunk type field, and
  constants such as `CT_PAYLOAD_DATA`, `CT_SACK` and `CT_FORWARD_TSN`.
  `str()` gives the readable name (`"SACK"`, `"Unknown ChunkType: 255"`).
- `sctpchunks.chunk` — `ChunkHeader`, the `Chunk` base class, `ErrorCause`,
  `ErrorCauseCode` with its cause-code constants, and `SctpError`, raised on
  every decoding failure.
- `sctpchunks.control` — `ChunkAbort`, `ChunkError`, `ChunkCookieEcho`,
  `ChunkCookieAck`, `ChunkShutdown`, `ChunkShutdownAck` and
  `ChunkShutdownComplete`.
- `sctpchunks.forward_tsn` — `ChunkForwardTsn` and `ChunkForwardTsnStream`.
- `sctpchunks.payload_data` — `ChunkPayloadData` (DATA) and
  `PayloadProtocolIdentifier`.
- `sctpchunks.selective_ack` — `ChunkSelectiveAck` (SACK) and `GapAckBlock`.
- `sctpchunks.timer` — `Timer`, `TimerTable`, `RtoManager` and
  `calculate_next_timeout` (RFC 4960 section 6.3).
- `sctpchunks.config` — `TransportConfig`, `EndpointConfig`, `ServerConfig`
  and `ClientConfig`.

Every chunk class is a dataclass with `unmarshal(raw)` (a classmethod),
`marshal()`, `header()`, `value_length()` and `check()`.

## Installation

```
pip install .
```

## Usage

Decode a chunk and encode it back:

```python
from sctpchunks.control import ChunkShutdown

raw = bytes([0x07, 0x00, 0x00, 0x08, 0x12, 0x34, 0x56, 0x78])
chunk = ChunkShutdown.unmarshal(raw)
assert chunk.cumulative_tsn_ack == 0x12345678
assert chunk.marshal() == raw
```

Malformed input raises `SctpError`:

```python
from sctpchunks.chunk import SctpError
from sctpchunks.control import ChunkShutdown

try:
    ChunkShutdown.unmarshal(bytes([0x07, 0x00, 0x00]))
except SctpError as err:
    print("rejected:", err)
```

Build an ERROR chunk carrying an error cause:

```python
from sctpchunks.chunk import UNRECOGNIZED_CHUNK_TYPE, ErrorCause
from sctpchunks.control import ChunkError

chunk = ChunkError(error_causes=[ErrorCause(code=UNRECOGNIZED_CHUNK_TYPE)])
print(chunk.marshal().hex())  # 0900000800060004
```

A DATA chunk:

```python
from sctpchunks.payload_data import ChunkPayloadData, PayloadProtocolIdentifier

data = ChunkPayloadData(
    beginning_fragment=True,
    ending_fragment=True,
    tsn=1,
    payload_type=PayloadProtocolIdentifier.STRING,
    user_data=b"hello",
)
decoded = ChunkPayloadData.unmarshal(data.marshal())
assert decoded.user_data == b"hello"
```

Retransmission timeouts (milliseconds):

```python
from sctpchunks.timer import RtoManager, Timer, TimerTable

rto = RtoManager()
rto.set_new_rtt(600)
print(rto.rto)  # 1800

timers = TimerTable()          # deadlines are seconds on a monotonic clock
timers.start(Timer.T3_RTX, now=0.0, interval=rto.rto)
print(timers.is_expired(Timer.T3_RTX, 2.0))  # (True, False, 1)
```

Configuration objects are dataclasses; `TransportConfig` is frozen, so derive
variants with `dataclasses.replace`:

```python
import dataclasses
from sctpchunks.config import TransportConfig

config = dataclasses.replace(TransportConfig(), max_message_size=30000)
```

## What it does not do

The package handles individual chunks only. It has no INIT, INIT-ACK,
HEARTBEAT, HEARTBEAT-ACK or RECONFIG chunk classes, no chunk parameters, no
parsing of whole packets (common header and checksum), and no association,
stream or socket layer. `EndpointConfig.aid_generator_factory` is stored but
nothing in the package calls it.

## Running the tests

```
pip install .[test]
pytest
```