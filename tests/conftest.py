from __future__ import annotations

import shutil
import sys
from pathlib import Path

import pytest

# pytest may run without installing the project; ensure repo root is importable.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from notary.core.chain import Chain  # noqa: E402
from notary.core.config import Config  # noqa: E402
from notary.core.time import FrozenClock  # noqa: E402
from notary.notarization import OwnershipNotary  # noqa: E402
from tests.unit._doubles import AlwaysValid  # noqa: E402

T0 = 1_700_000_000


@pytest.fixture()
def temp_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture()
def test_config(temp_dir: Path) -> Config:
    """Config fixture loaded from a copy of the repo defaults."""

    cfg_dst_dir = temp_dir / "config"
    cfg_dst_dir.mkdir(parents=True, exist_ok=True)
    shutil.copy2(REPO_ROOT / "config" / "default.yaml", cfg_dst_dir / "default.yaml")

    c = Config.from_yaml(cfg_dst_dir / "default.yaml")
    return c.model_copy(update={"config_dir": cfg_dst_dir})


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(T0)


@pytest.fixture()
def chain(clock: FrozenClock) -> Chain:
    return Chain(clock=clock)


@pytest.fixture()
def verifier() -> AlwaysValid:
    return AlwaysValid()


@pytest.fixture()
def notary(chain: Chain, verifier: AlwaysValid, clock: FrozenClock) -> OwnershipNotary:
    return OwnershipNotary(chain, verifier, clock=clock)
