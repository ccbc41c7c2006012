"""starchain.core.challenge

Ownership challenges.

Format: ``{address}:{unix_seconds}:{tag}``.
The server keeps nothing. The timestamp inside the string is the only state.
"""

from __future__ import annotations

from dataclasses import dataclass

from starchain import CHALLENGE_TAG
from starchain.core.exceptions import MalformedChallengeError


@dataclass(frozen=True)
class Challenge:
    address: str
    issued_at: int
    tag: str = CHALLENGE_TAG

    def __str__(self) -> str:
        return f"{self.address}:{self.issued_at}:{self.tag}"


def build_challenge(address: str, issued_at: int, *, tag: str = CHALLENGE_TAG) -> str:
    if not address:
        raise ValueError("address must be a non-empty string")
    return str(Challenge(address=address, issued_at=int(issued_at), tag=tag))


def parse_challenge(message: str, *, tag: str = CHALLENGE_TAG) -> Challenge:
    """Parse a challenge message.

    Splits from the right so the address segment may itself contain ``:``.

    Raises:
        MalformedChallengeError: if the tag or timestamp segment is wrong.
    """

    parts = str(message).rsplit(":", 2)
    if len(parts) != 3:
        raise MalformedChallengeError(f"not a challenge message: {message!r}")

    address, ts_raw, got_tag = parts
    if got_tag != tag:
        raise MalformedChallengeError(f"unexpected challenge tag: {got_tag!r}")
    if not address:
        raise MalformedChallengeError("challenge carries no address")
    # plain ASCII decimal only, as build_challenge writes it
    if not (ts_raw.isascii() and ts_raw.isdigit()):
        raise MalformedChallengeError(f"bad challenge timestamp: {ts_raw!r}")
    issued_at = int(ts_raw)

    return Challenge(address=address, issued_at=issued_at, tag=got_tag)
