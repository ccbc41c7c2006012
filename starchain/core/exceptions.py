"""starchain.core.exceptions

Errors are part of the interface.

A rejected write leaves the chain exactly as it was. The error says why.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from starchain.core.validation import LinkError


class StarchainError(Exception):
    """Base exception for starchain."""


class ConfigError(StarchainError):
    """Configuration is missing, invalid, or inconsistent."""


class ChallengeError(StarchainError):
    """The ownership challenge cannot be accepted."""


class ExpiredChallengeError(ChallengeError):
    """The challenge is older than the signing window."""

    def __init__(self, elapsed_seconds: int, window_seconds: int) -> None:
        super().__init__(
            f"challenge expired: {elapsed_seconds}s elapsed, window is {window_seconds}s"
        )
        self.elapsed_seconds = elapsed_seconds
        self.window_seconds = window_seconds


class MalformedChallengeError(ChallengeError):
    """The message is not a challenge this ledger issued."""


class ChallengeAddressMismatchError(ChallengeError):
    """The challenge was issued for a different address."""


class InvalidPayloadError(StarchainError):
    """The payload cannot be encoded as a block body."""


class InvalidSignatureError(StarchainError):
    """The verifier rejected the signature for this address and message."""


class ChainIntegrityError(StarchainError):
    """Hash linkage or block self-integrity is broken."""

    def __init__(self, message: str, errors: list[LinkError] | None = None) -> None:
        super().__init__(message)
        self.errors: list[LinkError] = list(errors or [])


class BlockIntegrityError(ChainIntegrityError):
    """A block's stored hash does not match its contents."""


class GenesisAccessError(StarchainError):
    """The genesis body is a sentinel. It is not data."""
