"""notary.core

Core primitives.

If a module needs to exist, it should probably depend only on this package.
"""

from .block import Block, SealedBlock
from .chain import Chain
from .config import Config
from .exceptions import NotaryError
from .records import StarRecord
from .time import now_seconds
from .types import IssueKind, ValidationIssue
from .views import BlockView

__all__ = [
    "Block",
    "BlockView",
    "Chain",
    "Config",
    "IssueKind",
    "NotaryError",
    "SealedBlock",
    "StarRecord",
    "ValidationIssue",
    "now_seconds",
]
