"""Start-up timer used to bound retries during bootstrap."""

from __future__ import annotations

import time

_NANOS_PER_SECOND = 1_000_000_000


def _with_fraction(value: int, digits: int) -> str:
    whole, frac = divmod(value, 10**digits)
    text = str(whole)
    frac_text = f"{frac:0{digits}d}".rstrip("0")
    if frac_text:
        text += "." + frac_text
    return text


def format_duration(seconds: float) -> str:
    """Render a duration in seconds the way durations are shown in logs, e.g. ``1m2.5s``."""
    total = round(seconds * _NANOS_PER_SECOND)
    if total == 0:
        return "0s"
    sign = "-" if total < 0 else ""
    nanos = abs(total)
    if nanos < 1_000:
        return f"{sign}{nanos}ns"
    if nanos < 1_000_000:
        return f"{sign}{_with_fraction(nanos, 3)}µs"
    if nanos < _NANOS_PER_SECOND:
        return f"{sign}{_with_fraction(nanos, 6)}ms"

    whole_seconds, frac = divmod(nanos, _NANOS_PER_SECOND)
    hours, rest = divmod(whole_seconds, 3600)
    minutes, secs = divmod(rest, 60)
    sec_text = _with_fraction(secs * _NANOS_PER_SECOND + frac, 9) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{sec_text}"
    if minutes:
        return f"{sign}{minutes}m{sec_text}"
    return sign + sec_text


class Timer:
    """Tracks a start-up window of ``duration`` seconds, retried every ``interval`` seconds."""

    def __init__(self, duration: float, interval: float):
        self.duration = duration
        self.interval = interval
        self._started = time.monotonic()

    def _elapsed(self) -> float:
        return time.monotonic() - self._started

    def since_as_string(self) -> str:
        """Time since the timer was created."""
        return format_duration(self._elapsed())

    def remaining_as_string(self) -> str:
        """Time left before the duration runs out, never negative."""
        return format_duration(max(0.0, self.duration - self._elapsed()))

    def has_not_elapsed(self) -> bool:
        """Whether the duration has not yet run out."""
        return self._elapsed() < self.duration

    def sleep_for_interval(self) -> None:
        """Pause for the retry interval."""
        time.sleep(self.interval)