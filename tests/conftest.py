from __future__ import annotations

# SPDX-License-Identifier: GPL-3.0-only
# tests/conftest.py
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = REPO_ROOT / "src"
for candidate in (REPO_ROOT, SRC_ROOT):
    if str(candidate) not in sys.path:
        sys.path.insert(0, str(candidate))

# no-op se il pacchetto è installato (entry point pytest11 con lo stesso nome)
pytest_plugins = ["testenv.pytest_plugin"]

from testenv import env_utils
from testenv.env_constants import (
    LOG_LEVEL_ENV,
    LOG_PROPAGATE_ENV,
    MARKER_FILE_ENV,
    SETTINGS_FILE_ENV,
    WSL_DISTRO_NAME_ENV,
    WSLENV_ENV,
)


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isola i test da ~/.testenv, da un eventuale .env e dalle variabili WSL della macchina."""
    settings_dir = tmp_path_factory.mktemp("settings")
    monkeypatch.setenv(SETTINGS_FILE_ENV, str(settings_dir / "settings.yaml"))
    for name in (LOG_LEVEL_ENV, LOG_PROPAGATE_ENV, MARKER_FILE_ENV, WSL_DISTRO_NAME_ENV, WSLENV_ENV):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(env_utils, "_DOTENV_VALUES", {})
