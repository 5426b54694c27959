# SPDX-License-Identifier: GPL-3.0-only
# src/testenv/settings.py
"""
Impostazioni globali di testenv.

Le impostazioni sono salvate in uno YAML globale (default: ~/.testenv/settings.yaml)
per non legarle a uno specifico progetto. Le variabili d'ambiente hanno precedenza.

Campi gestiti:
- log_level: verbosity dei logger strutturati (DEBUG, INFO, WARNING, ERROR)
- marker_file: nome del descrittore di build che identifica la artifact root

Fail-fast: YAML non parsabile o valori non validi sollevano ConfigError;
un file assente equivale ai default.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import DEFAULT_LOG_LEVEL, DEFAULT_MARKER_FILE, LOG_LEVELS, SETTINGS_DIR_NAME, SETTINGS_FILE_NAME
from .env_constants import LOG_LEVEL_ENV, MARKER_FILE_ENV, SETTINGS_FILE_ENV
from .env_utils import get_env_var
from .exceptions import ConfigError


@dataclass(frozen=True)
class TestEnvSettings:
    __test__ = False

    log_level: str = DEFAULT_LOG_LEVEL
    marker_file: str = DEFAULT_MARKER_FILE


def get_settings_path() -> Path:
    """
    Percorso del file di impostazioni.

    - Se TESTENV_SETTINGS_FILE è impostata, usa quel path.
    - Altrimenti usa ~/.testenv/settings.yaml
    """
    custom = get_env_var(SETTINGS_FILE_ENV)
    if custom:
        return Path(custom).expanduser()
    return Path.home() / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME


def _normalize_level(level: Any, *, source: str) -> str:
    level_upper = str(level).strip().upper()
    if level_upper == "WARN":
        level_upper = "WARNING"
    if level_upper not in LOG_LEVELS:
        raise ConfigError(f"log_level non valido: {level!r}", file_path=source)
    return level_upper


def _validate_marker(marker: Any, *, source: str) -> str:
    if not isinstance(marker, str) or not marker.strip():
        raise ConfigError(f"marker_file non valido: {marker!r}", file_path=source)
    name = marker.strip()
    if "/" in name or "\\" in name or name in {".", ".."}:
        raise ConfigError(f"marker_file deve essere un nome di file, non un path: {name}", file_path=source)
    return name


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigError(f"YAML impostazioni non valido: {exc}", file_path=str(path)) from exc
    except OSError as exc:
        raise ConfigError(f"Errore lettura file: {exc}", file_path=str(path)) from exc
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Il file impostazioni deve contenere una mappa YAML", file_path=str(path))
    return raw


def load_settings(path: Optional[Path] = None) -> TestEnvSettings:
    """
    Carica le impostazioni: ENV > YAML > default.

    Nessuna cache: il file viene riletto ad ogni chiamata.
    """
    settings_path = path or get_settings_path()
    raw: Dict[str, Any] = _read_yaml(settings_path) if settings_path.is_file() else {}
    source = str(settings_path)

    level: Any = get_env_var(LOG_LEVEL_ENV)
    level_source = LOG_LEVEL_ENV
    if level is None:
        level = raw.get("log_level", DEFAULT_LOG_LEVEL)
        level_source = source

    marker: Any = get_env_var(MARKER_FILE_ENV)
    marker_source = MARKER_FILE_ENV
    if marker is None:
        marker = raw.get("marker_file", DEFAULT_MARKER_FILE)
        marker_source = source

    return TestEnvSettings(
        log_level=_normalize_level(level, source=level_source),
        marker_file=_validate_marker(marker, source=marker_source),
    )


def resolve_marker(marker: Optional[str] = None) -> str:
    """Marker esplicito se fornito (validato), altrimenti quello delle impostazioni."""
    if marker is not None:
        return _validate_marker(marker, source="argument")
    return load_settings().marker_file


__all__ = ["TestEnvSettings", "get_settings_path", "load_settings", "resolve_marker"]
