"""starchain.core.validation

Integrity is a walk, not a lookup.

Every link is checked, every time. A broken chain reports all of its
breaks, not just the first one it trips over.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from starchain.core.block import Block

LinkFault = Literal["block_invalid", "previous_invalid", "link_mismatch", "height_mismatch"]


@dataclass(frozen=True)
class LinkError:
    """A break in hash-chain continuity at ``height``."""

    height: int
    reason: LinkFault
    block_hash: str | None = None

    def __str__(self) -> str:
        return f"link invalid at height {self.height}: {self.reason}"


def check_link(previous: Block, current: Block, *, height: int) -> LinkError | None:
    """Check one link. At most one error per position."""

    if not current.validate():
        return LinkError(height=height, reason="block_invalid", block_hash=current.hash)
    if not previous.validate():
        return LinkError(height=height, reason="previous_invalid", block_hash=current.hash)
    if previous.hash != current.previous_hash:
        return LinkError(height=height, reason="link_mismatch", block_hash=current.hash)
    if current.height != height:
        return LinkError(height=height, reason="height_mismatch", block_hash=current.hash)
    return None


def validate_chain(blocks: Sequence[Block]) -> list[LinkError]:
    """Validate the whole sequence. An empty list means the chain is valid.

    Index 0 has no predecessor and is exempt from linkage checks.
    Never mutates a block and never stops early.
    """

    errors: list[LinkError] = []
    for i in range(1, len(blocks)):
        err = check_link(blocks[i - 1], blocks[i], height=i)
        if err is not None:
            errors.append(err)
    return errors
