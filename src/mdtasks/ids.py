"""Task identifier generation."""

from __future__ import annotations

import time


def generate_task_ids(count: int = 1, *, now: float | None = None) -> list[str]:
    """Return ``count`` identifiers based on the current time in milliseconds.

    Identifiers added by one command are consecutive:
    ``["1700000000000", "1700000000001", ...]``.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    timestamp = time.time() if now is None else now
    base = int(timestamp * 1000)
    return [str(base + offset) for offset in range(count)]
