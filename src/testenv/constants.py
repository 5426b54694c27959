# SPDX-License-Identifier: GPL-3.0-only
# src/testenv/constants.py
"""Single Source of Truth (SSoT) per i **nomi di file** e le costanti usate da testenv.

Note uso:
- I chiamanti devono **importare da qui** invece di hardcodare stringhe.
"""

# 📦 Marker della artifact root (descrittore di build)
DEFAULT_MARKER_FILE = "pyproject.toml"

# 📦 Suffissi di archivi impacchettati (il codice vive dentro un singolo file)
ARCHIVE_SUFFIXES = (".zip", ".egg", ".whl", ".pyz", ".jar")

# ⚙️ Impostazioni
SETTINGS_DIR_NAME = ".testenv"
SETTINGS_FILE_NAME = "settings.yaml"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# 🪵 Debug dump
DEBUG_DUMP_HEADER = "=== TestEnv Debug Info ==="

__all__ = [
    "DEFAULT_MARKER_FILE",
    "ARCHIVE_SUFFIXES",
    "SETTINGS_DIR_NAME",
    "SETTINGS_FILE_NAME",
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVELS",
    "DEBUG_DUMP_HEADER",
]
