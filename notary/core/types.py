"""notary.core.types

Lightweight dataclasses for diagnostics.

Pydantic models own IO boundaries; dataclasses keep the validation walk lean.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class IssueKind(StrEnum):
    TAMPERED_BLOCK = "TamperedBlock"
    BROKEN_LINK = "BrokenLink"
    HEIGHT_MISMATCH = "HeightMismatch"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One finding of a chain walk.

    ``declared_previous`` / ``actual_previous`` are set for ``BrokenLink`` only.
    """

    kind: IssueKind
    height: int
    digest: str | None
    declared_previous: str | None = None
    actual_previous: str | None = None

    def describe(self) -> str:
        if self.kind is IssueKind.BROKEN_LINK:
            return (
                f"block {self.height} links to {self.declared_previous!r}, "
                f"predecessor digest is {self.actual_previous!r}"
            )
        if self.kind is IssueKind.HEIGHT_MISMATCH:
            return f"block {self.digest!r} stored at position {self.height} declares a different height"
        return f"block {self.height} digest {self.digest!r} does not match its content"

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": str(self.kind),
            "height": self.height,
            "digest": self.digest,
            "declared_previous": self.declared_previous,
            "actual_previous": self.actual_previous,
        }
