from __future__ import annotations

import time

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from api.deps import get_chain, get_config
from notary import __version__
from notary.core.chain import Chain
from notary.core.config import Config

router = APIRouter()


class HealthResponse(BaseModel):
    version: str
    uptime_seconds: float
    height: int
    challenge_window_seconds: int
    signature_scheme: str


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    chain: Chain = Depends(get_chain),
    config: Config = Depends(get_config),
) -> HealthResponse:
    started_at = float(getattr(request.app.state, "started_at", time.monotonic()))
    return HealthResponse(
        version=__version__,
        uptime_seconds=time.monotonic() - started_at,
        height=chain.height(),
        challenge_window_seconds=config.notary.challenge_window_seconds,
        signature_scheme=config.notary.signature_scheme,
    )
