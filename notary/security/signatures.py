"""notary.security.signatures

Signature oracles: (message, address, signature) -> bool.

A signature that does not match, or is not even well formed, is ``False``.
Anything else the backend raises is the caller's to wrap.
"""

from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey


@runtime_checkable
class SignatureVerifier(Protocol):
    def verify(self, message: str, address: str, signature: str) -> bool: ...


def _require_eth_account() -> None:
    try:
        import eth_account  # noqa: F401
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "Ethereum signatures require eth-account (install with: pip install starnotary[eth])"
        ) from e


def _require_bitcoinlib() -> None:
    try:
        import bitcoin.signmessage  # noqa: F401
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "Bitcoin signatures require python-bitcoinlib (install with: pip install starnotary[bitcoin])"
        ) from e


def _hex_bytes(value: str) -> bytes:
    return bytes.fromhex(value.strip().removeprefix("0x"))


class Ed25519Verifier:
    """Address is the hex Ed25519 public key; signature is hex."""

    def verify(self, message: str, address: str, signature: str) -> bool:
        try:
            pub = Ed25519PublicKey.from_public_bytes(_hex_bytes(address))
            sig = _hex_bytes(signature)
        except ValueError:
            return False
        try:
            pub.verify(sig, message.encode("utf-8"))
            return True
        except InvalidSignature:
            return False


class EthereumMessageVerifier:
    """EIP-191 personal-message signatures, checked by signer recovery."""

    def __init__(self) -> None:
        _require_eth_account()

    def verify(self, message: str, address: str, signature: str) -> bool:
        from eth_account import Account
        from eth_account.messages import encode_defunct
        from eth_keys.exceptions import ValidationError as EthKeysValidationError
        from eth_utils.exceptions import ValidationError as EthUtilsValidationError

        try:
            recovered = Account.recover_message(encode_defunct(text=message), signature=signature)
        except (ValueError, TypeError, EthKeysValidationError, EthUtilsValidationError):
            return False
        return str(recovered).lower() == address.strip().lower()


class BitcoinMessageVerifier:
    """Bitcoin signed messages (Electrum, Bitcoin Core `signmessage`): base64 compact signature
    over the message, P2PKH address recovered from it.
    """

    def __init__(self) -> None:
        _require_bitcoinlib()

    def verify(self, message: str, address: str, signature: str) -> bool:
        from bitcoin.signmessage import BitcoinMessage, VerifyMessage
        from bitcoin.wallet import CBitcoinAddressError

        try:
            return bool(VerifyMessage(address.strip(), BitcoinMessage(message), signature))
        except (ValueError, TypeError, CBitcoinAddressError):
            return False


def build_verifier(scheme: Literal["ed25519", "ethereum", "bitcoin"]) -> SignatureVerifier:
    if scheme == "ed25519":
        return Ed25519Verifier()
    if scheme == "ethereum":
        return EthereumMessageVerifier()
    if scheme == "bitcoin":
        return BitcoinMessageVerifier()
    raise ValueError(f"unknown signature scheme: {scheme}")
