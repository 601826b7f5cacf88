"""Association timers and retransmission timeout management."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

ACK_INTERVAL = 200
MAX_INIT_RETRANS = 8
PATH_MAX_RETRANS = 5

RTO_INITIAL = 3000  # msec
RTO_MIN = 1000  # msec
RTO_MAX = 60000  # msec
RTO_ALPHA = 1
RTO_BETA = 2
RTO_BASE = 8


class Timer(IntEnum):
    T1_INIT = 0
    T1_COOKIE = 1
    T2_SHUTDOWN = 2
    T3_RTX = 3
    RECONFIG = 4
    ACK = 5


class TimerTable:
    """Deadlines and retransmission counts for each kind of timer.

    Times are in seconds on a monotonic clock; intervals are in milliseconds.
    """

    def __init__(self) -> None:
        self._deadlines: dict[Timer, float | None] = {t: None for t in Timer}
        self._retrans: dict[Timer, int] = {t: 0 for t in Timer}
        self._max_retrans: dict[Timer, int | None] = {t: None for t in Timer}
        self._max_retrans[Timer.T1_INIT] = MAX_INIT_RETRANS
        self._max_retrans[Timer.T1_COOKIE] = MAX_INIT_RETRANS

    def set(self, timer: Timer, time: float | None) -> None:
        self._deadlines[timer] = time

    def get(self, timer: Timer) -> float | None:
        return self._deadlines[timer]

    def next_timeout(self) -> float | None:
        return min((t for t in self._deadlines.values() if t is not None), default=None)

    def start(self, timer: Timer, now: float, interval: int) -> None:
        if timer != Timer.ACK:
            interval = calculate_next_timeout(interval, self._retrans[timer])
        self._deadlines[timer] = now + interval / 1000

    def restart_if_stale(self, timer: Timer, now: float, interval: int) -> None:
        """Restart the timer if it is unset or already elapsed."""
        current = self._deadlines[timer]
        if current is not None and current >= now:
            return
        self.start(timer, now, interval)

    def stop(self, timer: Timer) -> None:
        self._deadlines[timer] = None
        self._retrans[timer] = 0

    def is_expired(self, timer: Timer, after: float) -> tuple[bool, bool, int]:
        """Return (expired, failure, retransmission count) for the timer."""
        deadline = self._deadlines[timer]
        expired = deadline is not None and deadline <= after
        failure = False
        if expired:
            self._retrans[timer] += 1
            limit = self._max_retrans[timer]
            failure = limit is not None and self._retrans[timer] > limit
        return expired, failure, self._retrans[timer]


@dataclass
class RtoManager:
    """Retransmission timeout computation per RFC 4960 section 6.3.1 (msec)."""

    srtt: int = 0
    rttvar: float = 0.0
    rto: int = RTO_INITIAL
    no_update: bool = False

    def set_new_rtt(self, rtt: int) -> int:
        """Feed a measured RTT; returns the smoothed RTT."""
        if self.no_update:
            return self.srtt

        if self.srtt == 0:
            self.srtt = rtt
            self.rttvar = rtt / 2.0
        else:
            self.rttvar = (
                (RTO_BASE - RTO_BETA) * self.rttvar + RTO_BETA * abs(self.srtt - rtt)
            ) / RTO_BASE
            self.srtt = ((RTO_BASE - RTO_ALPHA) * self.srtt + RTO_ALPHA * rtt) // RTO_BASE

        self.rto = min(max(self.srtt + int(4.0 * self.rttvar), RTO_MIN), RTO_MAX)
        return self.srtt

    def reset(self) -> None:
        if self.no_update:
            return
        self.srtt = 0
        self.rttvar = 0.0
        self.rto = RTO_INITIAL

    def set_rto(self, rto: int, no_update: bool) -> None:
        self.rto = rto
        self.no_update = no_update


def calculate_next_timeout(rto: int, n_rtos: int) -> int:
    """Back off the RTO by doubling per expiration, bounded by RTO_MAX."""
    if n_rtos < 31:
        return min(rto << n_rtos, RTO_MAX)
    return RTO_MAX