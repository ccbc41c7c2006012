from __future__ import annotations

import shutil
import sys
from pathlib import Path

import pytest

# pytest may run without installing the project; ensure repo root is importable.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from starchain.core.config import Config, LedgerConfig  # noqa: E402
from starchain.core.ledger import Ledger  # noqa: E402
from tests._fakes import FakeClock, StubVerifier  # noqa: E402


@pytest.fixture()
def temp_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture()
def test_config(temp_dir: Path) -> Config:
    """Config loaded from a temp copy of the repo defaults."""

    cfg_dst_dir = temp_dir / "config"
    cfg_dst_dir.mkdir(parents=True, exist_ok=True)
    shutil.copy2(REPO_ROOT / "config" / "default.yaml", cfg_dst_dir / "default.yaml")
    return Config.from_yaml(cfg_dst_dir / "default.yaml")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def verifier() -> StubVerifier:
    return StubVerifier()


@pytest.fixture()
def ledger(clock: FakeClock, verifier: StubVerifier) -> Ledger:
    return Ledger(verifier=verifier, config=LedgerConfig(), clock=clock)
