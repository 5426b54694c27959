# SPDX-License-Identifier: GPL-3.0-only
# src/testenv/cli.py
"""CLI `testenv`: mostra la artifact root risolta a partire da un path.

Uso:
    testenv [PATH] [--marker NOME] [--show-root]

Exit code: 0 se ok, altrimenti `exit_code_for(exc)` per gli errori noti.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .exceptions import TestEnvError, exit_code_for
from .locator import EnvironmentLocator
from .logging_utils import get_structured_logger

LOGGER = get_structured_logger("testenv.cli")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="testenv",
        description="Individua la artifact root (directory con il descrittore di build) risalendo da PATH.",
    )
    parser.add_argument("path", nargs="?", default=".", help="Punto di partenza (default: directory corrente)")
    parser.add_argument("--marker", default=None, help="Nome del marker file (default: impostazioni/pyproject.toml)")
    parser.add_argument(
        "--show-root",
        action="store_true",
        help="Stampa solo la artifact root invece del blocco diagnostico",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        locator = EnvironmentLocator(args.path, marker=args.marker)
    except TestEnvError as exc:
        LOGGER.error("cli.failed", extra={"error": str(exc)})
        print(f"testenv: {exc}", file=sys.stderr)
        return exit_code_for(exc)

    if args.show_root:
        print(locator.artifact_root)
    else:
        locator.debug_dump(sys.stdout)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
