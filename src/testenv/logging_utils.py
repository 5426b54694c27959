# SPDX-License-Identifier: GPL-3.0-only
# src/testenv/logging_utils.py
"""Logging strutturato per testenv.

Obiettivi:
- Logger **idempotente**: chiamate ripetute non creano handler duplicati.
- Messaggi come **codici evento** puntati (`locator.root.found`), dettagli in `extra`.
- Niente `print` per la diagnostica: unica eccezione voluta è `EnvironmentLocator.debug_dump`.

Formato di output:
    %(asctime)s %(levelname)s %(name)s: %(message)s | event=<evt> reference=<r> start_path=<p> ...
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from .constants import DEFAULT_LOG_LEVEL
from .env_constants import LOG_PROPAGATE_ENV
from .env_utils import get_bool
from .exceptions import ConfigError

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_KV_FIELDS = (
    "event",
    "reference",
    "start_path",
    "marker",
    "artifact_root",
    "file_path",
    "error",
)


def _settings_levelno() -> int:
    """Livello dalle impostazioni (ENV/YAML), fallback WARNING. Letto ad ogni chiamata."""
    try:  # lazy import per evitare cicli durante bootstrap
        from .settings import load_settings

        level_name = load_settings().log_level
    except ConfigError:
        # impostazioni rotte: il chiamante riceverà ConfigError quando le usa davvero
        level_name = DEFAULT_LOG_LEVEL
    return getattr(logging, level_name, logging.WARNING)


class _SettingsLevelFilter(logging.Filter):
    """Soglia del console handler risolta all'emissione: nessuna lettura di impostazioni a import-time."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= _settings_levelno()


class _EventDefaultFilter(logging.Filter):
    """Garantisce che 'event' sia sempre presente; se manca usa il messaggio come codice evento."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "event"):
            msg = record.msg
            record.event = msg.strip() if isinstance(msg, str) and msg.strip() else "log"
        return True


class _KVFormatter(logging.Formatter):
    """Formatter semplice e leggibile, con campi chiave-valore stabili."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        kv = []
        for k in _KV_FIELDS:
            v = getattr(record, k, None)
            if v:
                kv.append(f"{k}={v}")
        if kv:
            return f"{base} | " + " ".join(kv)
        return base


def _ensure_no_duplicate_handlers(lg: logging.Logger, key: str) -> None:
    to_remove = [h for h in lg.handlers if getattr(h, "_logging_utils_key", None) == key]
    for h in to_remove:
        lg.removeHandler(h)


def _set_logger_filter(lg: logging.Logger, flt: logging.Filter, key: str) -> None:
    """Sostituisce (se presente) un filtro identificato dal key."""
    to_remove = [f for f in lg.filters if getattr(f, "_logging_utils_key", None) == key]
    for f in to_remove:
        lg.removeFilter(f)
    flt._logging_utils_key = key  # type: ignore[attr-defined]
    lg.addFilter(flt)


def _resolve_propagate(propagate: Optional[bool]) -> bool:
    if propagate is not None:
        return propagate
    # sotto pytest caplog è attaccato al root logger: serve la propagazione
    under_pytest = bool(os.getenv("PYTEST_CURRENT_TEST") or "pytest" in sys.modules)
    # solo ambiente di processo: niente lettura di .env durante la creazione dei logger
    return get_bool(LOG_PROPAGATE_ENV, default=under_pytest, env=os.environ)


def get_structured_logger(
    name: str,
    *,
    level: int | str | None = None,
    propagate: Optional[bool] = None,
) -> logging.Logger:
    """Restituisce un logger configurato e idempotente.

    Parametri:
        name:      nome del logger (es. 'testenv.locator').
        level:     livello fisso; se assente la soglia segue le impostazioni testenv
                   (fallback WARNING), rilette ad ogni record emesso.
        propagate: propagazione al root (default: ENV `TESTENV_LOG_PROPAGATE`,
                   attiva automaticamente sotto pytest).
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    lg = logging.getLogger(name)
    lg.setLevel(logging.DEBUG if level is None else level)
    lg.propagate = _resolve_propagate(propagate)

    event_filter = _EventDefaultFilter()
    _set_logger_filter(lg, event_filter, f"{name}::event_filter")

    key_console = f"{name}::console"
    _ensure_no_duplicate_handlers(lg, key_console)
    ch = logging.StreamHandler(stream=sys.stderr)
    if level is None:
        ch.addFilter(_SettingsLevelFilter())
    else:
        ch.setLevel(level)
    ch.setFormatter(_KVFormatter(_FORMAT))
    ch._logging_utils_key = key_console  # type: ignore[attr-defined]
    ch.addFilter(event_filter)
    lg.addHandler(ch)
    return lg


__all__ = ["get_structured_logger"]
