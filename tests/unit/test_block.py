from __future__ import annotations

import pytest
from pydantic import ValidationError

from starchain.core.block import Block, compute_block_hash
from starchain.core.exceptions import BlockIntegrityError, GenesisAccessError, InvalidPayloadError


def _sealed(payload: dict | None = None, *, height: int = 1) -> Block:
    return Block.from_payload(payload or {"coord": "1,1"}).seal(height=height, time=1_700_000_000, previous_hash="ab" * 32)


def test_construct_sets_placeholders() -> None:
    b = Block.from_payload({"coord": "1,1"})
    assert b.hash is None
    assert b.height == 0
    assert b.time == 0
    assert b.previous_hash is None
    assert not b.is_sealed


def test_body_is_hex_of_canonical_json() -> None:
    b = Block.from_payload({"b": 2, "a": 1})
    assert b.body == '{"a":1,"b":2}'.encode("utf-8").hex()


def test_construct_rejects_non_json_payload() -> None:
    with pytest.raises(InvalidPayloadError):
        Block.from_payload({"tags": {"a"}})


def test_seal_leaves_original_untouched() -> None:
    b = Block.from_payload({"coord": "1,1"})
    s = b.seal(height=3, time=42, previous_hash="00" * 32)
    assert b.hash is None and b.height == 0
    assert s.height == 3 and s.time == 42
    assert s.hash == compute_block_hash(body=b.body, height=3, time=42, previous_hash="00" * 32)


def test_hash_excludes_the_hash_field() -> None:
    s = _sealed()
    assert s.compute_hash() == s.hash
    assert s.model_copy(update={"hash": "ff" * 32}).compute_hash() == s.hash


def test_validate_is_true_for_sealed_block_and_repeatable() -> None:
    s = _sealed()
    before = s.model_dump()
    assert s.validate() is True
    assert s.validate() is True
    assert s.model_dump() == before


def test_unsealed_block_is_never_valid() -> None:
    assert Block.from_payload({"x": 1}).validate() is False


@pytest.mark.parametrize(
    "update",
    [
        {"height": 2},
        {"time": 1_700_000_001},
        {"previous_hash": "cd" * 32},
        {"hash": "00" * 32},
    ],
)
def test_any_field_mutation_fails_validation(update: dict) -> None:
    assert _sealed().model_copy(update=update).validate() is False


def test_flipping_one_body_byte_fails_validation() -> None:
    s = _sealed()
    raw = bytearray(bytes.fromhex(s.body))
    raw[2] ^= 0x01
    assert s.model_copy(update={"body": raw.hex()}).validate() is False


def test_assert_valid_raises_on_mismatch() -> None:
    s = _sealed()
    s.assert_valid()
    with pytest.raises(BlockIntegrityError):
        s.model_copy(update={"time": 0}).assert_valid()


def test_sealed_block_is_frozen() -> None:
    s = _sealed()
    with pytest.raises(ValidationError):
        s.height = 9  # type: ignore[misc]


def test_decode_body_returns_original_payload() -> None:
    payload = {"star": {"dec": "68° 52' 56.9", "ra": "16h 29m 1.0s", "story": "ünïcödé"}, "n": [1, 2, None]}
    assert _sealed(payload).decode_body() == payload


def test_decode_body_on_genesis_is_rejected() -> None:
    genesis = Block.from_payload({"data": "Genesis Block"}).seal(height=0, time=1, previous_hash=None)
    assert genesis.is_genesis
    with pytest.raises(GenesisAccessError):
        genesis.decode_body()
