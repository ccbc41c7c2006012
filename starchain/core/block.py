"""starchain.core.block

The block is the primitive.

A block is built open, sealed once, and never touched again.
Its hash commits to everything it carries except the hash itself.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from starchain.core.encoding import decode_body, encode_body, sha256_hex
from starchain.core.exceptions import BlockIntegrityError, GenesisAccessError, InvalidPayloadError


def compute_block_hash(
    *,
    body: str,
    height: int,
    time: int,
    previous_hash: str | None,
) -> str:
    """Compute the canonical SHA-256 block hash.

    Hash = sha256(canonical_json({body, height, previous_hash, time}))

    The ``hash`` field is never an input.
    """

    return sha256_hex(
        {
            "body": body,
            "height": int(height),
            "previous_hash": previous_hash,
            "time": int(time),
        }
    )


class Block(BaseModel):
    """Immutable ledger record.

    Unsealed blocks carry placeholders (``hash=None``, ``height=0``, ``time=0``,
    ``previous_hash=None``) until :meth:`seal` returns the committed copy.
    """

    hash: str | None = None
    height: int = 0
    body: str
    time: int = 0
    previous_hash: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Block:
        """Build an unsealed block.

        Raises:
            InvalidPayloadError: if ``payload`` is not JSON-serializable.
        """

        try:
            body = encode_body(payload)
        except (TypeError, ValueError) as e:
            raise InvalidPayloadError(f"payload is not JSON-serializable: {e}") from e
        return cls(body=body)

    @property
    def is_genesis(self) -> bool:
        return self.height == 0

    @property
    def is_sealed(self) -> bool:
        return self.hash is not None

    def compute_hash(self) -> str:
        return compute_block_hash(
            body=self.body,
            height=self.height,
            time=self.time,
            previous_hash=self.previous_hash,
        )

    def validate(self) -> bool:
        """Return True only if the stored hash matches the current contents.

        Pure: nothing on the block changes, however often this is called.
        """

        if self.hash is None:
            return False
        return self.compute_hash() == self.hash

    def assert_valid(self) -> None:
        if not self.validate():
            raise BlockIntegrityError(
                f"block {self.height} hash mismatch: stored={self.hash} computed={self.compute_hash()}"
            )

    def decode_body(self) -> Any:
        """Return the payload this block was built from.

        Raises:
            GenesisAccessError: for the genesis block (height 0).
        """

        if self.height == 0:
            raise GenesisAccessError("the genesis block body is a sentinel, not user data")
        return decode_body(self.body)

    def seal(self, *, height: int, time: int, previous_hash: str | None) -> Block:
        """Return the sealed copy of this block. ``self`` is left as it was."""

        opened = self.model_copy(
            update={
                "hash": None,
                "height": int(height),
                "time": int(time),
                "previous_hash": previous_hash,
            }
        )
        return opened.model_copy(update={"hash": opened.compute_hash()})
