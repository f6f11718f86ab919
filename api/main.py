from __future__ import annotations

import time
from pathlib import Path

from fastapi import FastAPI

from api.errors import ApiError, api_error_handler
from api.routes import get_api_router
from notary import __version__
from notary.core.chain import Chain
from notary.core.config import Config
from notary.notarization import OwnershipNotary


def create_app(
    config: Config | None = None,
    *,
    chain: Chain | None = None,
    notary: OwnershipNotary | None = None,
) -> FastAPI:
    """One app, one chain. The chain lives as long as the process."""

    if config is None:
        root = Path.cwd()
        config = Config.from_repo_defaults(root) if (root / "config" / "default.yaml").exists() else Config()

    if notary is None:
        if chain is None:
            chain = Chain()
        notary = OwnershipNotary.from_config(chain, config)
    chain = notary.chain

    openapi_tags = [
        {"name": "health", "description": "Liveness and version metadata."},
        {"name": "blocks", "description": "Read-only access to sealed blocks and chain integrity."},
        {"name": "stars", "description": "Ownership challenges and star notarization."},
    ]

    app = FastAPI(
        title="starnotary API",
        description="Star ownership notarized on an in-memory hash chain",
        version=__version__,
        openapi_tags=openapi_tags,
    )

    app.state.started_at = time.monotonic()
    app.state.config = config
    app.state.chain = chain
    app.state.notary = notary

    app.add_exception_handler(ApiError, api_error_handler)
    app.include_router(get_api_router())
    return app


# Module-level app for uvicorn (e.g. `uvicorn api.main:app`).
# Guarded so test imports don't crash when a configured signature backend isn't installed.
try:
    app = create_app()
except RuntimeError:
    app = None
