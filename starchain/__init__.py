"""starchain: a notary that cannot forget.

Every star is a block. Every block remembers the one before it.
The first block remembers nothing, and says so.
"""

from __future__ import annotations

__all__ = [
    "__version__",
    "GENESIS_DATA",
    "CHALLENGE_TAG",
    "CHALLENGE_WINDOW_SECONDS",
]

__version__ = "1.0.0"

# Sentinel payload of block 0. Never user data.
GENESIS_DATA = "Genesis Block"

# Trailing segment of every ownership challenge: ``<address>:<ts>:starRegistry``.
CHALLENGE_TAG = "starRegistry"

CHALLENGE_WINDOW_SECONDS = 300
