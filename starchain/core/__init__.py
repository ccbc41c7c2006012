"""starchain.core

Core primitives.

If a module needs to exist, it should probably depend only on this package.
"""

from .block import Block, compute_block_hash
from .config import Config
from .exceptions import StarchainError
from .ledger import Ledger
from .time import unix_now
from .validation import LinkError, validate_chain

__all__ = [
    "Block",
    "Config",
    "Ledger",
    "LinkError",
    "StarchainError",
    "compute_block_hash",
    "unix_now",
    "validate_chain",
]
