"""SCTP chunk encoding and decoding, retransmission timers and association configuration."""

__version__ = "0.1.0"