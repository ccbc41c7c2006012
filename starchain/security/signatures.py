"""starchain.security.signatures

Proof of possession.

The ledger never checks a signature itself. It asks a verifier:
``verify(message, address, signature) -> bool``. A verifier answers, it does
not raise.

The default verifier speaks Ethereum personal messages (EIP-191): the signer
is recovered from the signature and must equal the claimed address.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from eth_account import Account
from eth_account.messages import encode_defunct

logger = logging.getLogger(__name__)


@runtime_checkable
class SignatureVerifier(Protocol):
    def verify(self, message: str, address: str, signature: str) -> bool: ...

    def normalize_address(self, address: str) -> str:
        """Canonical spelling of ``address``. Owners are stored and looked up by it."""
        ...


def _norm_addr(v: str) -> str:
    s = str(v).strip().lower()
    if not s.startswith("0x"):
        s = "0x" + s
    return s


def _sig_bytes(signature: str) -> bytes:
    return bytes.fromhex(str(signature).strip().removeprefix("0x"))


class EthereumMessageVerifier:
    """Verify EIP-191 ``personal_sign`` signatures with eth_account."""

    def recover(self, message: str, signature: str) -> str:
        msg = encode_defunct(text=message)
        return str(Account.recover_message(msg, signature=_sig_bytes(signature)))

    def verify(self, message: str, address: str, signature: str) -> bool:
        try:
            recovered = self.recover(message, signature)
        except Exception:
            logger.debug("signature_unrecoverable", extra={"address": address})
            return False
        return _norm_addr(recovered) == _norm_addr(address)

    def normalize_address(self, address: str) -> str:
        return _norm_addr(address)


def sign_message(message: str, private_key: str | bytes) -> str:
    """Sign ``message`` as an EIP-191 personal message. Returns 0x-prefixed hex.

    Client-side helper: wallets normally do this out-of-band.
    """

    msg = encode_defunct(text=message)
    signed = Account.sign_message(msg, private_key=private_key)
    return "0x" + bytes(signed.signature).hex()
