# SPDX-License-Identifier: GPL-3.0-only
# src/testenv/exceptions.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

"""
Eccezioni SSoT per testenv.

Ruoli principali:
- `TestEnvError`: base per tutti gli errori del pacchetto, con payload di contesto
  opzionale (reference, start_path, file_path, marker) reso in `__str__`.
- `ConfigError`: impostazioni YAML/ENV non valide.
- `LocationResolutionError`: posizione su disco del codice di riferimento non
  determinabile (o ambigua).
- `RootNotFoundError`: nessun marker trovato risalendo fino alla root del filesystem.
- `NoParentError`: operazione relativa al parent invocata su una root di filesystem.
- `EXIT_CODES` + `exit_code_for`: tabella centralizzata per la CLI.

Linee guida:
- Nessuna eccezione fa I/O o termina il processo.
- I messaggi includono il contesto necessario alla diagnosi senza rieseguire.
"""

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class TestEnvError(Exception):
    """Eccezione base per errori bloccanti di testenv.

    Accetta un messaggio e un payload contestuale opzionale utile per logging
    strutturato e diagnosi.
    """

    # evita che pytest provi a collezionare la classe come test case
    __test__ = False

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        reference: Optional[str] = None,
        start_path: Optional[str | Path] = None,
        file_path: Optional[str | Path] = None,
        marker: Optional[str] = None,
        **_: Any,
    ) -> None:
        super().__init__(message or "")
        self.reference: Optional[str] = reference
        self.start_path: Optional[str | Path] = start_path
        self.file_path: Optional[str | Path] = file_path
        self.marker: Optional[str] = marker

    def __str__(self) -> str:
        base_msg = super().__str__() or self.__class__.__name__
        context_parts: list[str] = []
        if self.reference:
            context_parts.append(f"reference={self.reference}")
        if self.start_path:
            context_parts.append(f"start_path={self.start_path}")
        if self.file_path:
            context_parts.append(f"file={self.file_path}")
        if self.marker:
            context_parts.append(f"marker={self.marker}")
        context_info = f" [{' | '.join(context_parts)}]" if context_parts else ""
        return f"{base_msg}{context_info}"


# ---------------------------------------------------------------------------
# Errori tipizzati
# ---------------------------------------------------------------------------


class ConfigError(TestEnvError):
    """Errore di caricamento o validazione delle impostazioni."""

    pass


class LocationResolutionError(TestEnvError):
    """Posizione su disco del codice di riferimento non risolvibile o ambigua."""

    pass


class RootNotFoundError(TestEnvError):
    """Marker file assente in tutte le directory antenate del punto di partenza."""

    pass


class NoParentError(TestEnvError):
    """La artifact root non ha una directory parent (root del filesystem)."""

    pass


# ---------------------------------------------------------------------------
# Exit codes centralizzati (nessun side-effect)
# ---------------------------------------------------------------------------

EXIT_CODES = {
    "TestEnvError": 1,
    "ConfigError": 2,
    "LocationResolutionError": 3,
    "RootNotFoundError": 4,
    "NoParentError": 5,
}


def exit_code_for(exc: BaseException) -> int:
    """Restituisce il codice di uscita per un’eccezione (fallback a TestEnvError=1)."""
    return EXIT_CODES.get(type(exc).__name__, EXIT_CODES["TestEnvError"])


__all__ = [
    "TestEnvError",
    "ConfigError",
    "LocationResolutionError",
    "RootNotFoundError",
    "NoParentError",
    "EXIT_CODES",
    "exit_code_for",
]
