"""notary.core.records

The record contract: who owns which star.

Payloads are opaque bytes on the chain; this module is the only place that knows their shape.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from notary import GENESIS_MARKER


class StarRecord(BaseModel):
    """A notarized claim. Extra keys submitted alongside ``star`` are preserved."""

    owner: str = Field(min_length=1)
    star: Any

    model_config = {"frozen": True, "extra": "allow"}


def canonical_json(data: Any) -> str:
    """Canonical JSON serialization used for payload bytes."""

    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def encode_payload(data: Any) -> bytes:
    return canonical_json(data).encode("utf-8")


def genesis_payload() -> bytes:
    return encode_payload(GENESIS_MARKER)


def build_record(owner: str, record: Mapping[str, Any]) -> StarRecord:
    """Bind a submitted mapping to its owner. The owner argument always wins.

    Raises:
        pydantic.ValidationError: if ``star`` is missing or the owner is empty.
    """

    return StarRecord.model_validate({**dict(record), "owner": owner})


def encode_record(record: StarRecord) -> bytes:
    return encode_payload(record.model_dump(mode="json"))


def decode_record(raw: bytes) -> StarRecord:
    """Decode payload bytes into a record.

    Raises:
        ValueError: bytes are not UTF-8 JSON, or the JSON is not a record
            (``pydantic.ValidationError`` is a ``ValueError``).
    """

    obj = json.loads(raw.decode("utf-8"))
    return StarRecord.model_validate(obj)
