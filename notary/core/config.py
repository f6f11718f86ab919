"""notary.core.config

Two config surfaces only:
1) `config/default.yaml` (optionally shadowed by `config/user.yaml`)
2) Environment variables, prefix ``STARNOTARY_``, nested with ``__``

Everything else is derived.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from notary import PURPOSE_TAG
from notary.core.exceptions import ConfigError


def _deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge(result[k], v)
        else:
            result[k] = v
    return result


class NotaryConfig(BaseModel):
    """Ownership challenge settings."""

    challenge_window_seconds: int = 300
    purpose_tag: str = PURPOSE_TAG
    signature_scheme: Literal["ed25519", "ethereum", "bitcoin"] = "ed25519"

    @field_validator("challenge_window_seconds")
    @classmethod
    def window_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("challenge_window_seconds must be >= 1")
        return v

    @field_validator("purpose_tag")
    @classmethod
    def purpose_tag_is_one_segment(cls, v: str) -> str:
        if not v or ":" in v:
            raise ValueError("purpose_tag must be non-empty and must not contain ':'")
        return v


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s %(message)s"


class ApiConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000


class Config(BaseSettings):
    """Root configuration. Single source of truth."""

    config_dir: Path = Path("config")

    notary: NotaryConfig = Field(default_factory=NotaryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    model_config = {"env_prefix": "STARNOTARY_", "env_nested_delimiter": "__"}

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file is not valid YAML: {path}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file must hold a mapping: {path}")

        return cls(**raw)

    @classmethod
    def from_repo_defaults(cls, repo_root: Path | None = None) -> Config:
        root = repo_root or Path.cwd()
        default_path = root / "config" / "default.yaml"
        user_path = root / "config" / "user.yaml"
        if not user_path.exists():
            return cls.from_yaml(default_path)

        if not default_path.exists():
            raise ConfigError(f"Config file not found: {default_path}")
        base = yaml.safe_load(default_path.read_text()) or {}
        overlay = yaml.safe_load(user_path.read_text()) or {}
        return cls(**_deep_merge(base, overlay))
