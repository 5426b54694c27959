# SPDX-License-Identifier: GPL-3.0-only
# src/testenv/env_constants.py
"""SSoT per i nomi delle variabili d'ambiente lette da testenv."""

# rilevamento WSL (basta la presenza, il valore è ignorato)
WSL_DISTRO_NAME_ENV = "WSL_DISTRO_NAME"
WSLENV_ENV = "WSLENV"

SETTINGS_FILE_ENV = "TESTENV_SETTINGS_FILE"
LOG_LEVEL_ENV = "TESTENV_LOG_LEVEL"
MARKER_FILE_ENV = "TESTENV_MARKER_FILE"
LOG_PROPAGATE_ENV = "TESTENV_LOG_PROPAGATE"

__all__ = [
    "WSL_DISTRO_NAME_ENV",
    "WSLENV_ENV",
    "SETTINGS_FILE_ENV",
    "LOG_LEVEL_ENV",
    "MARKER_FILE_ENV",
    "LOG_PROPAGATE_ENV",
]
