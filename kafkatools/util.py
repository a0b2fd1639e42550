"""Time and string helpers shared by the client code."""

from __future__ import annotations

import time as _time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import total_ordering

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLI = timedelta(milliseconds=1)


def duration_to_millis(duration: timedelta) -> int:
    """Return the whole number of milliseconds in a non-negative duration."""
    if duration < timedelta(0):
        raise ValueError(f"duration must not be negative: {duration!r}")
    return duration // _ONE_MILLI


def millis_to_epoch(time: datetime) -> int:
    """Return milliseconds since the Unix epoch; times before it give 0.

    Naive datetimes are taken to be in UTC.
    """
    if time.tzinfo is None:
        time = time.replace(tzinfo=timezone.utc)
    delta = time - _EPOCH
    if delta < timedelta(0):
        return 0
    return duration_to_millis(delta)


def current_time_millis() -> int:
    """Return the current time in milliseconds since the Unix epoch."""
    return _time.time_ns() // 1_000_000


def bytes_cstr_to_owned(bytes_cstr: bytes) -> str:
    """Decode a NUL-terminated byte string, replacing invalid UTF-8."""
    text, _, _ = bytes(bytes_cstr).partition(b"\x00")
    return text.decode("utf-8", errors="replace")


@total_ordering
@dataclass(frozen=True)
class Timeout:
    """A timeout: either a finite duration or "block forever" (``duration is None``)."""

    duration: timedelta | None = None

    def __post_init__(self) -> None:
        if self.duration is None:
            return
        if not isinstance(self.duration, timedelta):
            raise TypeError(f"duration must be a timedelta, got {self.duration!r}")
        if self.duration < timedelta(0):
            raise ValueError(f"duration must not be negative: {self.duration!r}")

    @classmethod
    def after(cls, duration: timedelta) -> Timeout:
        """A timeout that elapses after ``duration``."""
        if duration is None:
            raise TypeError("duration must be a timedelta, got None")
        return cls(duration)

    @classmethod
    def never(cls) -> Timeout:
        """A timeout that never elapses."""
        return cls(None)

    @classmethod
    def from_value(cls, value: Timeout | timedelta | None) -> Timeout:
        """Build a timeout from a Timeout, a timedelta, or None (never)."""
        if isinstance(value, Timeout):
            return value
        if value is None:
            return cls.never()
        return cls.after(value)

    @property
    def is_never(self) -> bool:
        return self.duration is None

    def as_millis(self) -> int:
        """Milliseconds for this timeout, or -1 when it never elapses."""
        if self.duration is None:
            return -1
        return duration_to_millis(self.duration)

    def __sub__(self, other: Timeout) -> Timeout:
        if not isinstance(other, Timeout):
            return NotImplemented
        if other.duration is None:
            raise ValueError("subtraction of a never-ending timeout is ill-defined")
        if self.duration is None:
            return self
        if other.duration > self.duration:
            raise ValueError("timeout subtraction would be negative")
        return Timeout(self.duration - other.duration)

    def __lt__(self, other: Timeout) -> bool:
        if not isinstance(other, Timeout):
            return NotImplemented
        if self.duration is None:
            return False
        if other.duration is None:
            return True
        return self.duration < other.duration