# SPDX-License-Identifier: GPL-3.0-only
from __future__ import annotations

"""Env utilities senza side-effects a import-time.

Espone:
- ``ensure_dotenv_loaded()``: legge .env (cercato dalla CWD verso l'alto) on-demand, idempotente.
- ``get_env_var(name, default=None)``: lettura sicura, processo prima di .env.
- ``get_bool(name, default=False)``: parsing booleano da ENV.
- ``is_env_set(name, environ=None)``: sola presenza della variabile (valore ignorato).

I valori di .env restano in una mappa privata: ``os.environ`` non viene mai modificato,
così le funzioni che leggono l'ambiente reale (es. WSL) non ne sono influenzati.
"""

import os
from collections.abc import Mapping
from typing import Dict, Optional

from dotenv import dotenv_values, find_dotenv

__all__ = [
    "ensure_dotenv_loaded",
    "get_env_var",
    "get_bool",
    "is_env_set",
]

_DOTENV_VALUES: Optional[Dict[str, str]] = None
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def ensure_dotenv_loaded() -> bool:
    """Legge il file .env una sola volta su richiesta esplicita.

    Ritorna True se la lettura è stata eseguita in questa chiamata,
    False se già eseguita in precedenza.
    """
    global _DOTENV_VALUES
    if _DOTENV_VALUES is not None:
        return False
    dotenv_path = find_dotenv(usecwd=True)
    values = dotenv_values(dotenv_path) if dotenv_path else {}
    _DOTENV_VALUES = {k: v for k, v in values.items() if v is not None}
    return True


def _lookup(name: str) -> Optional[str]:
    val = os.environ.get(name)
    if val is None:
        ensure_dotenv_loaded()
        val = (_DOTENV_VALUES or {}).get(name)
    return val


def get_env_var(name: str, default: Optional[str] = None) -> Optional[str]:
    """Ritorna il valore di una variabile d'ambiente (processo, poi .env).

    Trimma spazi; se vuota, tratta come non impostata.
    """
    val = _lookup(name)
    if val is None:
        return default
    sval = val.strip()
    return sval if sval else default


def get_bool(name: str, default: bool = False, *, env: Mapping[str, str] | None = None) -> bool:
    """Parsa un booleano da ENV (o mapping fornito) usando valori comuni truthy/falsy.

    Truthy: 1,true,yes,on (case-insensitive). Falsy: 0,false,no,off.
    Se non impostata o non riconosciuta, ritorna ``default``.
    Passando ``env`` si evita la lettura di .env.
    """
    val = env.get(name) if env is not None else _lookup(name)
    if val is None:
        return bool(default)
    s = str(val).strip().lower()
    if s in _TRUTHY:
        return True
    if s in _FALSY:
        return False
    return bool(default)


def is_env_set(name: str, environ: Mapping[str, str] | None = None) -> bool:
    """True se la variabile è presente nell'ambiente, anche con valore vuoto."""
    source = os.environ if environ is None else environ
    return source.get(name) is not None
