import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

_ENV_PREFIXES = ("PLAYERBOTBETTERSETUP_", "AIPLAYERBOT_", "INDIVIDUALPROGRESSION_")


def _is_e2e_test(request: pytest.FixtureRequest) -> bool:
    return "tests/e2e/" in str(request.node.fspath).replace("\\", "/")


@pytest.fixture(autouse=True)
def isolated_module_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("BETTERSETUP_DATABASE_URL", raising=False)


@pytest.fixture(autouse=True)
def e2e_quiet_env(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if not _is_e2e_test(request):
        return

    monkeypatch.setenv("BETTERSETUP_LOG_LEVEL", "WARNING")
    monkeypatch.setattr("bettersetup.__main__.load_dotenv", lambda *_args, **_kwargs: False)
