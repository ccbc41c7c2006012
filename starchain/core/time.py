"""starchain.core.time

A challenge is only as fresh as the clock that reads it.

This module is the *only* time helper surface in the codebase.
"""

from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], int]


def unix_now() -> int:
    """Current wall-clock time, truncated to whole seconds."""

    return int(time.time())


def elapsed_seconds(since: int, *, now: int | None = None) -> int:
    """Return whole seconds elapsed since ``since``.

    Args:
        since: Unix timestamp in seconds.
        now: Override clock for testing.

    Negative when ``since`` lies in the future.
    """

    ref = unix_now() if now is None else now
    return int(ref) - int(since)
