"""notary.security

Wallet identities and signature oracles.

Proof of control, never custody.
"""

from notary.security.identity import WalletIdentity, generate_wallet
from notary.security.signatures import (
    BitcoinMessageVerifier,
    Ed25519Verifier,
    EthereumMessageVerifier,
    SignatureVerifier,
    build_verifier,
)

__all__ = [
    "BitcoinMessageVerifier",
    "Ed25519Verifier",
    "EthereumMessageVerifier",
    "SignatureVerifier",
    "WalletIdentity",
    "build_verifier",
    "generate_wallet",
]
