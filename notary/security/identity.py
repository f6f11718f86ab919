"""notary.security.identity

Local Ed25519 wallets.

The address is the raw public key, hex. Keys live in memory only; nothing is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey


@dataclass(frozen=True)
class WalletIdentity:
    address: str        # Ed25519 public key hex
    private_key: str    # Ed25519 private key hex

    def _private_obj(self) -> Ed25519PrivateKey:
        return Ed25519PrivateKey.from_private_bytes(bytes.fromhex(self.private_key))

    def sign(self, message: str) -> str:
        """Sign a challenge string; returns the signature as hex."""
        return self._private_obj().sign(message.encode("utf-8")).hex()

    @classmethod
    def from_private_key(cls, private_key_hex: str) -> WalletIdentity:
        priv = Ed25519PrivateKey.from_private_bytes(bytes.fromhex(private_key_hex.removeprefix("0x")))
        return cls._from_obj(priv)

    @classmethod
    def _from_obj(cls, priv: Ed25519PrivateKey) -> WalletIdentity:
        pub_raw = priv.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        priv_raw = priv.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return cls(address=pub_raw.hex(), private_key=priv_raw.hex())


def generate_wallet() -> WalletIdentity:
    return WalletIdentity._from_obj(Ed25519PrivateKey.generate())
