"""notary.core.exceptions

Errors are part of the interface.

Corruption is surfaced, never retried. Stale or forged submissions are the caller's to retry.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from notary.core.types import ValidationIssue


class NotaryError(Exception):
    """Base exception for starnotary."""


class ConfigError(NotaryError):
    """Configuration is missing, invalid, or inconsistent."""


class ChainError(NotaryError):
    """Chain failures: integrity, linkage, or stored payloads."""


class BlockValidationError(ChainError):
    """A stored block could not be re-serialized for its integrity check."""


class GenesisPayloadError(ChainError):
    """The genesis payload is a marker, not a record."""


class PayloadDecodeError(ChainError):
    """Stored payload bytes do not decode back into a record."""


class OwnerLookupError(ChainError):
    """Owner lookup hit a corrupted block."""


class AppendError(ChainError):
    """Candidate block rejected before commit. The chain is unchanged."""

    def __init__(self, message: str, issue: ValidationIssue | None = None) -> None:
        super().__init__(message)
        self.issue = issue


class SubmitErrorKind(StrEnum):
    MALFORMED_CHALLENGE = "malformed_challenge"
    EXPIRED = "expired"
    BAD_SIGNATURE = "bad_signature"
    MALFORMED_RECORD = "malformed_record"
    VERIFIER_FAILED = "verifier_failed"
    CHAIN_REJECTED = "chain_rejected"


class SubmitError(NotaryError):
    """Submission refused. Recoverable by requesting a new challenge."""

    def __init__(self, kind: SubmitErrorKind, message: str) -> None:
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message
