"""starchain.security

Ownership proofs. The chain only records what a key has vouched for.
"""

from starchain.security.signatures import EthereumMessageVerifier, SignatureVerifier, sign_message

__all__ = [
    "EthereumMessageVerifier",
    "SignatureVerifier",
    "sign_message",
]
