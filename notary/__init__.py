"""notary — star ownership notarized on an in-memory hash chain.

One chain per process. Nothing is written to disk.

The first block is a marker, not a claim. Every claim after it is bound to a wallet.
"""

from __future__ import annotations

__all__ = [
    "__version__",
    "GENESIS_MARKER",
    "PURPOSE_TAG",
]

__version__ = "1.0.0"

# Decoded payload of block 0. Never surfaced as a record.
GENESIS_MARKER = {"data": "Genesis Block"}

# Last segment of every challenge string.
PURPOSE_TAG = "starRegistry"
