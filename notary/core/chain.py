"""notary.core.chain

The chain is the journal: append-only blocks, each bound to its predecessor's digest.

Writers are serialized. Readers never wait: they see the state before a commit or after it,
never in between.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from notary.core.block import Block, DigestFn, SealedBlock, sha256_hex
from notary.core.exceptions import (
    AppendError,
    BlockValidationError,
    ChainError,
    GenesisPayloadError,
    OwnerLookupError,
    PayloadDecodeError,
)
from notary.core.records import StarRecord
from notary.core.time import Clock, now_seconds
from notary.core.types import IssueKind, ValidationIssue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ChainState:
    blocks: tuple[SealedBlock, ...] = ()
    by_digest: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def extended(self, block: SealedBlock) -> _ChainState:
        index = dict(self.by_digest)
        index[block.digest] = block.height
        return _ChainState(blocks=self.blocks + (block,), by_digest=MappingProxyType(index))


def _walk(blocks: tuple[SealedBlock, ...], digest_fn: DigestFn, *, strict: bool) -> list[ValidationIssue]:
    """Collect issues. ``strict`` raises when the digest function itself fails; otherwise the
    block it failed on is reported as tampered.
    """

    issues: list[ValidationIssue] = []
    prev: SealedBlock | None = None
    for position, block in enumerate(blocks):
        try:
            intact = block.validate_digest(digest_fn=digest_fn)
        except BlockValidationError:
            intact = False
        except Exception as e:
            if strict:
                raise ChainError(f"digest function failed at block {position}: {e!r}") from e
            logger.warning("digest_function_failed", extra={"height": position, "error": repr(e)})
            intact = False
        if not intact:
            issues.append(ValidationIssue(IssueKind.TAMPERED_BLOCK, position, block.digest))

        if block.height != position:
            issues.append(ValidationIssue(IssueKind.HEIGHT_MISMATCH, position, block.digest))

        expected = None if prev is None else prev.digest
        if block.previous_digest != expected:
            issues.append(
                ValidationIssue(
                    IssueKind.BROKEN_LINK,
                    position,
                    block.digest,
                    declared_previous=block.previous_digest,
                    actual_previous=expected,
                )
            )
        prev = block
    return issues


class Chain:
    """In-memory hash chain. Block 0 is synthesized at construction."""

    def __init__(self, *, clock: Clock = now_seconds, digest_fn: DigestFn = sha256_hex) -> None:
        self._clock = clock
        self._digest_fn = digest_fn
        self._lock = threading.RLock()
        self._state = _ChainState()
        self.append(Block.genesis())

    def __len__(self) -> int:
        return len(self._state.blocks)

    def height(self) -> int:
        """Highest index; -1 only while the genesis block is being created."""

        return len(self._state.blocks) - 1

    def blocks(self) -> tuple[SealedBlock, ...]:
        return self._state.blocks

    def tail(self) -> SealedBlock | None:
        blocks = self._state.blocks
        return blocks[-1] if blocks else None

    def append(self, raw_block: Block) -> SealedBlock:
        """Link, seal, validate, commit. In that order, under the writer lock.

        Raises:
            AppendError: the chain with the candidate appended does not validate, or the
                digest function failed. The chain is left unchanged.
        """

        with self._lock:
            state = self._state
            tail = self.tail()
            previous = None if tail is None else tail.digest
            height = len(state.blocks)

            try:
                sealed = raw_block.seal(previous, height, self._clock(), digest_fn=self._digest_fn)
                candidate = state.extended(sealed)
                issues = _walk(candidate.blocks, self._digest_fn, strict=True)
            except ChainError as e:
                raise AppendError(f"append at height {height} failed: {e}") from e
            except Exception as e:
                raise AppendError(f"append at height {height} failed: sealing raised {e!r}") from e

            if issues:
                first = issues[0]
                logger.warning(
                    "append_rejected",
                    extra={"height": height, "issue": first.to_dict(), "issue_count": len(issues)},
                )
                raise AppendError(f"append at height {height} rejected: {first.describe()}", first)

            self._state = candidate
            logger.info("block_appended", extra={"height": sealed.height, "digest": sealed.digest})
            return sealed

    def get_by_digest(self, digest: str) -> SealedBlock | None:
        state = self._state
        height = state.by_digest.get(digest)
        if height is None:
            return None
        return state.blocks[height]

    def get_by_height(self, height: int) -> SealedBlock | None:
        blocks = self._state.blocks
        if height < 0 or height >= len(blocks):
            return None
        return blocks[height]

    def get_block(self, *, height: int | None = None, digest: str | None = None) -> SealedBlock | None:
        if (height is None) == (digest is None):
            raise ValueError("exactly one of height or digest is required")
        if height is not None:
            return self.get_by_height(height)
        return self.get_by_digest(str(digest))

    def get_records_by_owner(self, address: str) -> list[StarRecord]:
        """Records owned by ``address``, in submission order.

        Block 0 is skipped by position. Any other block that fails to decode aborts the call.
        """

        out: list[StarRecord] = []
        for block in self._state.blocks[1:]:
            try:
                record = block.decode_payload()
            except (GenesisPayloadError, PayloadDecodeError) as e:
                raise OwnerLookupError(f"owner lookup aborted at block {block.height}: {e}") from e
            if record.owner == address:
                out.append(record)
        return out

    def validate(self) -> list[ValidationIssue]:
        """Walk the chain once. An empty list means fully consistent.

        Read-only. Corruption is reported, not raised.
        """

        issues = _walk(self._state.blocks, self._digest_fn, strict=False)
        if issues:
            logger.warning(
                "chain_validation_failed",
                extra={"issues": [i.to_dict() for i in issues]},
            )
        return issues
