"""starchain.core.ledger

The ledger is the journal: append-only blocks with a hash chain.

One writer at a time. Readers get a snapshot and never see a block
that is still being sealed.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from starchain.core import validation
from starchain.core.block import Block
from starchain.core.challenge import build_challenge, parse_challenge
from starchain.core.config import Config, LedgerConfig
from starchain.core.exceptions import (
    ChainIntegrityError,
    ChallengeAddressMismatchError,
    ExpiredChallengeError,
    GenesisAccessError,
    InvalidSignatureError,
)
from starchain.core.time import Clock, elapsed_seconds, unix_now
from starchain.core.validation import LinkError
from starchain.security.signatures import EthereumMessageVerifier, SignatureVerifier

logger = logging.getLogger(__name__)


@dataclass
class Ledger:
    """In-memory star registry with hash-chained blocks."""

    verifier: SignatureVerifier = field(default_factory=EthereumMessageVerifier)
    config: LedgerConfig = field(default_factory=LedgerConfig)
    clock: Clock = unix_now

    def __post_init__(self) -> None:
        self._chain: list[Block] = []
        self._lock = threading.RLock()
        self.initialize()

    @classmethod
    def from_config(cls, config: Config, *, verifier: SignatureVerifier | None = None) -> Ledger:
        return cls(verifier=verifier or EthereumMessageVerifier(), config=config.ledger)

    # -----------------
    # Writes
    # -----------------

    def initialize(self) -> Block:
        """Seed the genesis block. No-op once the chain has one."""

        with self._lock:
            if self._chain:
                return self._chain[0]
            genesis = self.append(Block.from_payload({"data": self.config.genesis_data}))
            logger.info("genesis_created", extra={"block_hash": genesis.hash})
            return genesis

    def append(self, block: Block) -> Block:
        """Seal ``block`` onto the tip and commit it.

        The prospective chain (current blocks plus the sealed candidate) is
        validated before commit. On any link error nothing is committed.

        Raises:
            ChainIntegrityError: with the detected link errors attached.
        """

        with self._lock:
            tip = self._chain[-1] if self._chain else None
            sealed = block.seal(
                height=len(self._chain),
                time=self.clock(),
                previous_hash=tip.hash if tip is not None else None,
            )

            errors = validation.validate_chain([*self._chain, sealed])
            if errors:
                logger.warning(
                    "append_rejected",
                    extra={"block_height": sealed.height, "link_errors": [str(e) for e in errors]},
                )
                raise ChainIntegrityError(f"append rejected: {len(errors)} invalid link(s)", errors)

            self._chain.append(sealed)
            logger.info("block_appended", extra={"block_height": sealed.height, "block_hash": sealed.hash})
            return sealed

    def request_ownership_challenge(self, address: str) -> str:
        """Return ``{address}:{unix_seconds}:{tag}`` for the owner to sign.

        Nothing is recorded here; the timestamp travels inside the message.
        """

        message = build_challenge(address, self.clock(), tag=self.config.challenge_tag)
        logger.debug("challenge_issued", extra={"address": address})
        return message

    def submit_star(self, address: str, message: str, signature: str, star: dict[str, Any]) -> Block:
        """Record ``star`` for ``address`` once the signed challenge checks out.

        Gates run in order and the first failure wins: challenge freshness,
        optional address match, payload encoding, then the signature.
        The owner is stored in the verifier's canonical address spelling.

        Raises:
            MalformedChallengeError: ``message`` is not a challenge.
            ExpiredChallengeError: older than ``challenge_window_seconds``.
            ChallengeAddressMismatchError: only with ``require_address_match``.
            InvalidPayloadError: ``star`` cannot be encoded as JSON.
            InvalidSignatureError: the verifier said no.
            ChainIntegrityError: the append was rejected.
        """

        challenge = parse_challenge(message, tag=self.config.challenge_tag)
        window = self.config.challenge_window_seconds
        # A challenge stamped ahead of the clock has negative elapsed time and is accepted.
        elapsed = elapsed_seconds(challenge.issued_at, now=self.clock())
        if elapsed > window:
            logger.info("challenge_expired", extra={"address": address, "elapsed_seconds": elapsed})
            raise ExpiredChallengeError(elapsed, window)

        owner = self.verifier.normalize_address(address)
        if self.config.require_address_match and self.verifier.normalize_address(challenge.address) != owner:
            raise ChallengeAddressMismatchError(
                f"challenge was issued for {challenge.address!r}, not {address!r}"
            )

        block = Block.from_payload({"address": owner, "message": message, "signature": signature, "star": star})

        if not self.verifier.verify(message, address, signature):
            logger.info("signature_rejected", extra={"address": address})
            raise InvalidSignatureError(f"signature does not prove ownership of {address}")

        return self.append(block)

    # -----------------
    # Reads
    # -----------------

    @property
    def height(self) -> int:
        with self._lock:
            return len(self._chain) - 1

    def get_chain_height(self) -> int:
        return self.height

    def blocks(self) -> tuple[Block, ...]:
        """Consistent snapshot of the chain, genesis first."""

        with self._lock:
            return tuple(self._chain)

    def get_block_by_height(self, height: int) -> Block | None:
        chain = self.blocks()
        if 0 <= height < len(chain):
            return chain[height]
        return None

    def get_block_by_hash(self, block_hash: str) -> Block | None:
        for block in self.blocks():
            if block.hash == block_hash:
                return block
        return None

    def get_stars_by_owner(self, address: str) -> list[Any]:
        """Stars recorded for ``address``, in append order.

        Addresses are compared in the verifier's canonical spelling. Blocks owned
        by anyone else are skipped; the scan always finishes.
        """

        owner = self.verifier.normalize_address(address)
        stars: list[Any] = []
        for block in self.blocks()[1:]:
            try:
                record = block.decode_body()
            except (ValueError, GenesisAccessError):
                logger.warning("block_undecodable", extra={"block_height": block.height})
                continue
            if not isinstance(record, dict) or not isinstance(record.get("address"), str):
                continue
            if self.verifier.normalize_address(record["address"]) == owner:
                stars.append(record.get("star"))
        return stars

    def validate_chain(self) -> list[LinkError]:
        """Audit the whole chain. Never raises; an empty list means intact."""

        errors = validation.validate_chain(self.blocks())
        if errors:
            logger.warning("chain_invalid", extra={"link_errors": [str(e) for e in errors]})
        return errors
