"""notary.core.block

A block is sealed once, in one step. There is no half-built block to observe.

Digest input: canonical JSON array ``[height, timestamp, previous_digest, payload_hex]``.
No predecessor is ``null``, which never collides with an empty string.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable

from pydantic import BaseModel

from notary.core.exceptions import BlockValidationError, GenesisPayloadError, PayloadDecodeError
from notary.core.records import StarRecord, canonical_json, decode_record, encode_record, genesis_payload

DigestFn = Callable[[bytes], str]


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def serialize_header(
    *, height: int, timestamp: int, previous_digest: str | None, payload: bytes
) -> bytes:
    """Stable byte serialization of every block field except the digest."""

    fields = [int(height), int(timestamp), previous_digest, payload.hex()]
    return canonical_json(fields).encode("utf-8")


class Block(BaseModel):
    """Unsealed candidate: payload only. Height, time and linkage belong to the chain."""

    payload: bytes

    model_config = {"frozen": True}

    @classmethod
    def genesis(cls) -> Block:
        return cls(payload=genesis_payload())

    @classmethod
    def for_record(cls, record: StarRecord) -> Block:
        return cls(payload=encode_record(record))

    def seal(
        self,
        previous_digest: str | None,
        height: int,
        timestamp: int,
        *,
        digest_fn: DigestFn = sha256_hex,
    ) -> SealedBlock:
        if height < 0:
            raise ValueError("height cannot be negative")
        header = serialize_header(
            height=height, timestamp=timestamp, previous_digest=previous_digest, payload=self.payload
        )
        return SealedBlock(
            height=height,
            timestamp=timestamp,
            previous_digest=previous_digest,
            payload=self.payload,
            digest=digest_fn(header),
        )


class SealedBlock(BaseModel):
    """Immutable block record. The chain's fundamental primitive."""

    height: int
    timestamp: int
    previous_digest: str | None = None
    payload: bytes
    digest: str

    model_config = {"frozen": True}

    @property
    def is_genesis(self) -> bool:
        return self.previous_digest is None

    def compute_digest(self, *, digest_fn: DigestFn = sha256_hex) -> str:
        """Recompute the digest from every field but the stored one.

        Raises:
            BlockValidationError: the stored fields cannot be re-serialized.
        """

        try:
            header = serialize_header(
                height=self.height,
                timestamp=self.timestamp,
                previous_digest=self.previous_digest,
                payload=self.payload,
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise BlockValidationError(f"block {self.height}: cannot serialize stored fields: {e}") from e
        return digest_fn(header)

    def validate_digest(self, *, digest_fn: DigestFn = sha256_hex) -> bool:
        """True when the stored digest still matches the content. A mismatch is not an error."""

        return self.compute_digest(digest_fn=digest_fn) == self.digest

    def decode_payload(self) -> StarRecord:
        if self.is_genesis:
            raise GenesisPayloadError("genesis block carries a marker, not a record")
        try:
            return decode_record(self.payload)
        except (UnicodeDecodeError, ValueError, AttributeError) as e:
            raise PayloadDecodeError(f"block {self.height}: payload does not decode: {e}") from e
