"""notary.core.views

What leaves the core. Untrusted callers get the encoded body; trusted callers also get the record.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from notary.core.block import SealedBlock


class BlockView(BaseModel):
    height: int
    timestamp: int
    digest: str
    previous_digest: str | None = None
    body: str
    record: dict[str, Any] | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_block(cls, block: SealedBlock, *, trusted: bool = False) -> BlockView:
        """Build a view. ``trusted`` decodes the payload (never for block 0).

        Raises:
            PayloadDecodeError: trusted view of a block whose payload is corrupt.
        """

        record = None
        if trusted and not block.is_genesis:
            record = block.decode_payload().model_dump(mode="json")
        return cls(
            height=block.height,
            timestamp=block.timestamp,
            digest=block.digest,
            previous_digest=block.previous_digest,
            body=block.payload.hex(),
            record=record,
        )
