from __future__ import annotations

import pytest

from notary.core.block import Block, SealedBlock, serialize_header, sha256_hex
from notary.core.exceptions import BlockValidationError, GenesisPayloadError, PayloadDecodeError
from notary.core.records import StarRecord, encode_payload


def _record_block(owner: str = "addr1", star: object = "Polaris") -> Block:
    return Block.for_record(StarRecord(owner=owner, star=star))


def test_seal_is_deterministic_and_sets_linkage() -> None:
    raw = _record_block()
    a = raw.seal("ab" * 32, 3, 1_700_000_000)
    b = raw.seal("ab" * 32, 3, 1_700_000_000)

    assert a == b
    assert a.height == 3
    assert a.timestamp == 1_700_000_000
    assert a.previous_digest == "ab" * 32
    assert len(a.digest) == 64


def test_digest_commits_to_height_time_link_and_payload_in_order() -> None:
    raw = _record_block()
    sealed = raw.seal("prev", 1, 42)
    expected = sha256_hex(f'[1,42,"prev","{raw.payload.hex()}"]'.encode())
    assert sealed.digest == expected
    assert serialize_header(height=1, timestamp=42, previous_digest=None, payload=b"\x01") == b'[1,42,null,"01"]'


def test_missing_and_empty_predecessor_serialize_differently() -> None:
    none = serialize_header(height=0, timestamp=42, previous_digest=None, payload=b"\x01")
    empty = serialize_header(height=0, timestamp=42, previous_digest="", payload=b"\x01")
    assert none != empty


def test_seal_rejects_negative_height() -> None:
    with pytest.raises(ValueError):
        _record_block().seal(None, -1, 0)


def test_sealed_block_validates_immediately() -> None:
    sealed = _record_block().seal("prev", 1, 42)
    assert sealed.validate_digest() is True


@pytest.mark.parametrize(
    "update",
    [
        {"height": 2},
        {"timestamp": 43},
        {"previous_digest": "other"},
        {"payload": encode_payload({"owner": "mallory", "star": "Polaris"})},
    ],
)
def test_corrupting_any_field_fails_validation(update: dict) -> None:
    sealed = _record_block().seal("prev", 1, 42)
    corrupted = sealed.model_copy(update=update)
    assert corrupted.validate_digest() is False


def test_sealed_block_is_frozen() -> None:
    sealed = _record_block().seal("prev", 1, 42)
    with pytest.raises(Exception):
        sealed.payload = b"nope"  # type: ignore[misc]


def test_clearing_genesis_link_to_empty_string_fails_validation() -> None:
    genesis = Block.genesis().seal(None, 0, 42)
    assert genesis.validate_digest() is True
    assert genesis.model_copy(update={"previous_digest": ""}).validate_digest() is False


def test_unserializable_payload_is_a_validation_error() -> None:
    sealed = _record_block().seal("prev", 1, 42)
    corrupted = sealed.model_copy(update={"payload": None})
    with pytest.raises(BlockValidationError):
        corrupted.validate_digest()


def test_decode_payload_returns_record() -> None:
    sealed = _record_block("addr1", {"ra": "02h 31m", "dec": "+89"}).seal("prev", 1, 42)
    record = sealed.decode_payload()
    assert record.owner == "addr1"
    assert record.star == {"ra": "02h 31m", "dec": "+89"}


def test_decode_payload_refuses_genesis() -> None:
    genesis = Block.genesis().seal(None, 0, 42)
    assert genesis.is_genesis
    with pytest.raises(GenesisPayloadError):
        genesis.decode_payload()


@pytest.mark.parametrize("payload", [b"\xff\xfe", b"not json", encode_payload({"data": "Genesis Block"})])
def test_decode_payload_corruption_is_decode_error(payload: bytes) -> None:
    block = SealedBlock(height=1, timestamp=42, previous_digest="prev", payload=payload, digest="d")
    with pytest.raises(PayloadDecodeError):
        block.decode_payload()


def test_injected_digest_function_is_used() -> None:
    sealed = _record_block().seal(None, 0, 0, digest_fn=lambda data: "fixed")
    assert sealed.digest == "fixed"
    assert sealed.validate_digest(digest_fn=lambda data: "fixed") is True
    assert sealed.validate_digest() is False
