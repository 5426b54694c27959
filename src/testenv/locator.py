# SPDX-License-Identifier: GPL-3.0-only
# src/testenv/locator.py
"""
Localizzazione della artifact root a partire dal codice di riferimento.

Funzioni chiave:
- resolve_code_location: posizione su disco del codice che definisce un oggetto
  (classe, funzione, modulo) o di un path esplicito.
- resolve_search_start: punto di partenza della ricerca (directory contenente
  l'archivio o il file; la directory stessa se già tale).
- find_artifact_root: risale le directory fino al primo marker.
- EnvironmentLocator: risoluzione una-tantum + helper di composizione path.
- user_home / get_os_name / os_info / is_wsl: interrogazioni di ambiente senza stato.

Fail-fast: LocationResolutionError / RootNotFoundError sollevate nel costruttore,
nessuna istanza parziale viene restituita.
"""

from __future__ import annotations

import inspect
import os
import platform
import sys
import types
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from .constants import ARCHIVE_SUFFIXES, DEBUG_DUMP_HEADER
from .env_constants import WSL_DISTRO_NAME_ENV, WSLENV_ENV
from .env_utils import is_env_set
from .exceptions import LocationResolutionError, NoParentError, RootNotFoundError
from .logging_utils import get_structured_logger
from .settings import resolve_marker

LOGGER = get_structured_logger("testenv.locator")

PathLike = Union[str, "os.PathLike[str]"]
_UNRESOLVABLE_ORIGINS = {"built-in", "frozen"}


def describe_reference(reference: Any) -> str:
    """Nome leggibile del riferimento per messaggi d'errore e log."""
    if isinstance(reference, (str, os.PathLike)):
        return os.fspath(reference)
    if isinstance(reference, types.ModuleType):
        return reference.__name__
    qualname = getattr(reference, "__qualname__", None) or getattr(reference, "__name__", None)
    module = getattr(reference, "__module__", None)
    if qualname and module:
        return f"{module}.{qualname}"
    return repr(reference)


def _as_inspectable(reference: Any) -> Any:
    if (
        inspect.isclass(reference)
        or inspect.ismodule(reference)
        or inspect.isroutine(reference)
        or inspect.iscode(reference)
    ):
        return reference
    # istanze: si usa la classe che le definisce
    return type(reference)


def _location_from_getfile(obj: Any) -> Optional[Path]:
    try:
        filename = inspect.getfile(obj)
    except (TypeError, OSError):
        return None
    # "<string>", "<stdin>": codice senza file su disco
    if not filename or filename.startswith("<"):
        return None
    return Path(filename)


def _location_from_module_spec(obj: Any) -> Optional[Path]:
    module_name = obj.__name__ if inspect.ismodule(obj) else getattr(obj, "__module__", None)
    module = sys.modules.get(module_name) if module_name else None
    spec = getattr(module, "__spec__", None)
    origin = getattr(spec, "origin", None)
    if not origin or origin in _UNRESOLVABLE_ORIGINS:
        return None
    return Path(origin)


def resolve_code_location(reference: Any) -> Path:
    """Posizione assoluta su disco del codice di riferimento.

    - path (str/PathLike): usato così com'è, reso assoluto;
    - oggetti: `inspect.getfile`, fallback su `__spec__.origin` del modulo definente.

    Solleva LocationResolutionError se nessuna strategia produce un path.
    """
    name = describe_reference(reference)
    if isinstance(reference, (str, os.PathLike)):
        raw = os.fspath(reference)
        if not raw:
            raise LocationResolutionError("Path di riferimento vuoto", reference=repr(reference))
        return Path(raw).expanduser().resolve()

    obj = _as_inspectable(reference)
    location = _location_from_getfile(obj)
    if location is None:
        LOGGER.debug("locator.location.getfile_failed", extra={"reference": name})
        location = _location_from_module_spec(obj)
    if location is None:
        LOGGER.error("locator.location.unresolved", extra={"reference": name})
        raise LocationResolutionError("Impossibile determinare la posizione su disco del codice", reference=name)
    return location.resolve()


def _is_archive_name(path: Path) -> bool:
    return path.suffix.lower() in ARCHIVE_SUFFIXES


def _outer_archive(location: Path, *, reference: Optional[str]) -> Optional[Path]:
    """Archivio su disco più esterno che contiene `location` (o coincide con essa)."""
    chain = (location, *location.parents)
    outer = next((c for c in reversed(chain) if _is_archive_name(c) and c.is_file()), None)
    if outer is None:
        return None
    # archivio dentro archivio: la directory di partenza non è determinabile
    nested = [c for c in chain if outer in c.parents and _is_archive_name(c)]
    if nested:
        LOGGER.error(
            "locator.location.ambiguous_archive",
            extra={"reference": reference, "file_path": str(location)},
        )
        raise LocationResolutionError(
            f"Posizione ambigua: archivi annidati nel path ({outer} contiene {nested[-1].name})",
            reference=reference,
            file_path=str(location),
        )
    return outer


def resolve_search_start(location: Path, *, reference: Optional[str] = None) -> Path:
    """Directory da cui parte la ricerca del marker.

    - dentro (o coincidente con) un archivio: la directory che contiene l'archivio;
    - file sciolto: la sua directory;
    - directory: sé stessa.

    Archivi annidati rendono la posizione ambigua: LocationResolutionError.
    """
    archive = _outer_archive(location, reference=reference)
    if archive is not None:
        return archive.parent
    if location.is_dir():
        return location
    if location.is_file():
        return location.parent
    LOGGER.error("locator.location.missing", extra={"reference": reference, "file_path": str(location)})
    raise LocationResolutionError("La posizione del codice non esiste su disco", reference=reference, file_path=str(location))


def find_artifact_root(start: Path, marker: str, *, reference: Optional[str] = None) -> Path:
    """Prima directory (start inclusa) che contiene `marker`, risalendo verso la root."""
    for candidate in (start, *start.parents):
        if (candidate / marker).exists():
            return candidate
    LOGGER.error(
        "locator.root.not_found",
        extra={"reference": reference, "start_path": str(start), "marker": marker},
    )
    raise RootNotFoundError(
        f"Impossibile trovare la artifact root ({marker} assente in tutte le directory antenate)",
        reference=reference,
        start_path=str(start),
        marker=marker,
    )


# ---------------------------------------------------------------------------
# Ambiente di esecuzione (nessuno stato)
# ---------------------------------------------------------------------------


def user_home() -> Path:
    """Home dell'utente corrente."""
    return Path.home()


def get_os_name() -> str:
    return platform.system() or sys.platform


def is_wsl(os_name: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> bool:
    """True se l'OS è Linux e WSL_DISTRO_NAME o WSLENV sono presenti (valore ignorato)."""
    name = get_os_name() if os_name is None else os_name
    if "linux" not in name.lower():
        return False
    return is_env_set(WSL_DISTRO_NAME_ENV, environ) or is_env_set(WSLENV_ENV, environ)


def os_info(os_name: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> str:
    name = get_os_name() if os_name is None else os_name
    return f"OS: {name}, WSL: {is_wsl(name, environ)}"


# ---------------------------------------------------------------------------
# EnvironmentLocator
# ---------------------------------------------------------------------------


class EnvironmentLocator:
    """Artifact root risolta una volta sola a partire da un riferimento al codice.

    `reference` può essere una classe, una funzione, un modulo, un'istanza
    o un path esplicito. `marker` sovrascrive il nome del descrittore di build
    (default dalle impostazioni, `pyproject.toml`).
    """

    __slots__ = ("_artifact_root", "_marker")

    def __init__(self, reference: Any, *, marker: Optional[str] = None) -> None:
        marker_name = resolve_marker(marker)
        name = describe_reference(reference)
        location = resolve_code_location(reference)
        start = resolve_search_start(location, reference=name)
        root = find_artifact_root(start, marker_name, reference=name)
        self._artifact_root: Path = root
        self._marker: str = marker_name
        LOGGER.info(
            "locator.root.found",
            extra={"reference": name, "start_path": str(start), "artifact_root": str(root), "marker": marker_name},
        )

    @property
    def artifact_root(self) -> Path:
        return self._artifact_root

    @property
    def marker(self) -> str:
        return self._marker

    @staticmethod
    def relativize(base: PathLike, *segments: PathLike) -> Path:
        """Unisce `segments` a `base` da sinistra a destra; senza segmenti ritorna `base`."""
        result = Path(base)
        for segment in segments:
            result = result / segment
        return result

    def relative_to_artifact(self, *segments: PathLike) -> Path:
        return self.relativize(self._artifact_root, *segments)

    def relative_to_artifact_parent(self, *segments: PathLike) -> Path:
        parent = self._artifact_root.parent
        if parent == self._artifact_root:
            raise NoParentError(
                "La artifact root non ha una directory parent",
                start_path=str(self._artifact_root),
                marker=self._marker,
            )
        return self.relativize(parent, *segments)

    @staticmethod
    def path(first: PathLike, *more: PathLike) -> Path:
        """Path costruito con la semantica della piattaforma (non relativo alla root)."""
        return Path(first, *more)

    user_home = staticmethod(user_home)
    get_os_name = staticmethod(get_os_name)
    os_info = staticmethod(os_info)
    is_wsl = staticmethod(is_wsl)

    def debug_dump(self, stream: Optional[TextIO] = None) -> None:
        """Scrive un blocco diagnostico di 4 righe (default: stderr). Formato non stabile."""
        out = sys.stderr if stream is None else stream
        lines = (
            DEBUG_DUMP_HEADER,
            f"OS Info: {os_info()}",
            f"Artifact Root: {self._artifact_root}",
            f"User Home: {user_home()}",
        )
        out.write("\n".join(lines) + "\n")

    def __str__(self) -> str:
        return f"EnvironmentLocator{{moduleRoot='{self._artifact_root}'}}"

    def __repr__(self) -> str:
        return f"EnvironmentLocator(artifact_root={self._artifact_root!r}, marker={self._marker!r})"


__all__ = [
    "EnvironmentLocator",
    "describe_reference",
    "resolve_code_location",
    "resolve_search_start",
    "find_artifact_root",
    "user_home",
    "get_os_name",
    "os_info",
    "is_wsl",
]
