"""starchain.core.encoding

Canonical bytes in, canonical bytes out.

Two blocks with the same content must hash the same on every machine,
so nothing here depends on dict order or platform encoding.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def canonical_json(data: Any) -> str:
    """Canonical JSON serialization used for hashing and body encoding."""

    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def sha256_hex(data: Any) -> str:
    """SHA-256 hex digest of the canonical JSON of ``data``."""

    return hashlib.sha256(canonical_json(data).encode("utf-8")).hexdigest()


def encode_body(payload: dict[str, Any]) -> str:
    """Encode a payload as lowercase hex of its UTF-8 canonical JSON."""

    return canonical_json(payload).encode("utf-8").hex()


def decode_body(body: str) -> Any:
    """Reverse :func:`encode_body`.

    Raises:
        ValueError: if ``body`` is not hex-encoded UTF-8 JSON.
    """

    return json.loads(bytes.fromhex(body).decode("utf-8"))
