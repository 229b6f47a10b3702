"""Utilities for hashing and timestamps."""

import hashlib
from datetime import datetime, timezone


def hash_text(text: str) -> str:
    """Compute SHA256 hash of text. Deterministic."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def locale_timestamp(now: datetime | None = None) -> str:
    """
    Human-readable local timestamp, e.g. "10/18/2026, 3:04:05 PM".
    No zero padding on month, day or hour.
    """
    now = now or datetime.now()
    hour = now.hour % 12 or 12
    meridiem = "AM" if now.hour < 12 else "PM"
    return f"{now.month}/{now.day}/{now.year}, {hour}:{now.minute:02d}:{now.second:02d} {meridiem}"


def iso_now() -> str:
    """UTC timestamp with milliseconds, e.g. "2026-10-18T15:04:05.123Z"."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
