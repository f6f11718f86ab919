from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from notary.core.config import Config
from notary.core.exceptions import ConfigError


def test_default_yaml_loads(test_config: Config) -> None:
    assert test_config.notary.challenge_window_seconds == 300
    assert test_config.notary.purpose_tag == "starRegistry"
    assert test_config.notary.signature_scheme == "ed25519"
    assert test_config.api.port == 8000


def test_missing_file_is_config_error(temp_dir: Path) -> None:
    with pytest.raises(ConfigError):
        Config.from_yaml(temp_dir / "nope.yaml")


def test_non_mapping_yaml_is_config_error(temp_dir: Path) -> None:
    p = temp_dir / "bad.yaml"
    p.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        Config.from_yaml(p)


def test_user_yaml_overlays_defaults(test_config: Config) -> None:
    root = test_config.config_dir.parent
    (root / "config" / "user.yaml").write_text("notary:\n  challenge_window_seconds: 60\n")

    c = Config.from_repo_defaults(root)
    assert c.notary.challenge_window_seconds == 60
    assert c.notary.purpose_tag == "starRegistry"


def test_env_overrides_nested(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STARNOTARY_NOTARY__CHALLENGE_WINDOW_SECONDS", "42")
    assert Config().notary.challenge_window_seconds == 42


@pytest.mark.parametrize(
    "notary",
    [
        {"challenge_window_seconds": 0},
        {"purpose_tag": "star:registry"},
        {"purpose_tag": ""},
        {"signature_scheme": "rsa"},
    ],
)
def test_invalid_notary_settings_rejected(notary: dict) -> None:
    with pytest.raises(ValidationError):
        Config(notary=notary)
