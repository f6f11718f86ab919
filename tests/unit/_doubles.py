from __future__ import annotations

from dataclasses import replace

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from notary.core.chain import Chain


class AlwaysValid:
    """Signature oracle double: every signature verifies."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str]] = []

    def verify(self, message: str, address: str, signature: str) -> bool:
        self.calls.append((message, address, signature))
        return True


class NeverValid:
    def verify(self, message: str, address: str, signature: str) -> bool:
        return False


class ExplodingVerifier:
    def verify(self, message: str, address: str, signature: str) -> bool:
        raise RuntimeError("oracle offline")


def tamper(chain: Chain, height: int, **update: object) -> None:
    """Rewrite a stored block out-of-band, bypassing append."""

    state = chain._state
    blocks = list(state.blocks)
    blocks[height] = blocks[height].model_copy(update=update)
    chain._state = replace(state, blocks=tuple(blocks))


def make_client(app: FastAPI) -> AsyncClient:
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")
