from __future__ import annotations

from fastapi import Request

from notary.core.chain import Chain
from notary.core.config import Config
from notary.notarization import OwnershipNotary


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_chain(request: Request) -> Chain:
    return request.app.state.chain


def get_notary(request: Request) -> OwnershipNotary:
    return request.app.state.notary
