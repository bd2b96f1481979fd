# ruff: noqa: E402

import builtins
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import ghinit.config as config
import ghinit.io as io
import ghinit.log as ghinit_log


@pytest.fixture(autouse=True)
def _console_patches(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda app: str(tmp_path / "config" / app))
    monkeypatch.setattr(io, "_use_questionary", lambda: False)
    monkeypatch.setattr(ghinit_log, "_configured_level", ghinit_log.LogLevel.INFO)
    monkeypatch.setattr(ghinit_log, "_no_color_override", None)
    for key in (
        "GHINIT_GIT_PATH",
        "GHINIT_GH_PATH",
        "GHINIT_VISIBILITY",
        "GHINIT_COMMIT_MESSAGE",
        "GHINIT_DEFAULT_BRANCH",
        "GHINIT_GITHUB_HOST",
        "GHINIT_PROFILE",
    ):
        monkeypatch.delenv(key, raising=False)

    def fail_input(prompt: str = "") -> str:
        raise AssertionError("prompted unexpectedly")

    monkeypatch.setattr(builtins, "input", fail_input)