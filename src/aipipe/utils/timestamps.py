import time
from datetime import datetime, timezone
from typing import Optional


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """
    ISO-8601 UTC timestamp with millisecond precision and a `Z` suffix,
    e.g. "2024-05-01T12:34:56.789Z".
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0


def elapsed_ms(started_ms: float, ended_ms: Optional[float] = None) -> int:
    """Whole milliseconds between two `monotonic_ms` readings, never negative."""
    ended = monotonic_ms() if ended_ms is None else ended_ms
    return max(0, int(ended - started_ms))
