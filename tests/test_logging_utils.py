# SPDX-License-Identifier: GPL-3.0-only
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from testenv import logging_utils
from testenv.env_constants import LOG_LEVEL_ENV, LOG_PROPAGATE_ENV, SETTINGS_FILE_ENV
from testenv.logging_utils import _FORMAT, _KVFormatter, get_structured_logger


def _console_handlers(lg: logging.Logger) -> list[logging.Handler]:
    return [h for h in lg.handlers if getattr(h, "_logging_utils_key", None) == f"{lg.name}::console"]


def test_logger_is_idempotent() -> None:
    lg = get_structured_logger("testenv.tests.idempotent")
    get_structured_logger("testenv.tests.idempotent")
    assert len(_console_handlers(lg)) == 1


def _passes_console(lg: logging.Logger, levelno: int) -> bool:
    record = lg.makeRecord(lg.name, levelno, __file__, 1, "sample.event", None, None)
    return all(h.filter(record) and levelno >= h.level for h in _console_handlers(lg))


def test_level_follows_settings_after_creation(monkeypatch: pytest.MonkeyPatch) -> None:
    lg = get_structured_logger("testenv.tests.env_level")
    assert not _passes_console(lg, logging.INFO)
    # soglia riletta all'emissione: la variabile impostata dopo la creazione vale
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert _passes_console(lg, logging.DEBUG)
    monkeypatch.setenv(LOG_LEVEL_ENV, "error")
    assert not _passes_console(lg, logging.WARNING)
    assert _passes_console(lg, logging.ERROR)


def test_broken_settings_fall_back_to_warning(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    lg = get_structured_logger("testenv.tests.broken")
    broken = tmp_path / "settings.yaml"
    broken.write_text("log_level: [unclosed\n", encoding="utf-8")
    monkeypatch.setenv(SETTINGS_FILE_ENV, str(broken))
    assert not _passes_console(lg, logging.INFO)
    assert _passes_console(lg, logging.WARNING)


def test_logger_creation_does_not_read_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    def _fail() -> None:
        raise AssertionError("impostazioni lette alla creazione del logger")

    monkeypatch.setattr(logging_utils, "_settings_levelno", _fail)
    get_structured_logger("testenv.tests.lazy")


@pytest.mark.parametrize("raw, expected", [("0", False), ("off", False), ("yes", True), ("1", True)])
def test_propagate_from_env(raw: str, expected: bool, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_PROPAGATE_ENV, raw)
    assert get_structured_logger("testenv.tests.propagate_env").propagate is expected


def test_unrecognised_propagate_value_keeps_pytest_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_PROPAGATE_ENV, "maybe")
    assert get_structured_logger("testenv.tests.propagate_default").propagate is True


def test_explicit_level_and_propagate() -> None:
    lg = get_structured_logger("testenv.tests.explicit", level="INFO", propagate=False)
    assert lg.level == logging.INFO
    assert lg.propagate is False
    # sotto pytest la propagazione è attiva di default
    assert get_structured_logger("testenv.tests.explicit", level="INFO").propagate is True


def test_kv_formatter_appends_extra_fields() -> None:
    record = logging.LogRecord("testenv.x", logging.ERROR, __file__, 1, "locator.root.not_found", None, None)
    record.event = "locator.root.not_found"
    record.start_path = "/a/b"
    record.marker = "pom.xml"
    out = _KVFormatter(_FORMAT).format(record)
    assert "ERROR testenv.x: locator.root.not_found" in out
    assert out.endswith("| event=locator.root.not_found start_path=/a/b marker=pom.xml")


def test_event_defaults_to_message(caplog: pytest.LogCaptureFixture) -> None:
    lg = get_structured_logger("testenv.tests.event")
    caplog.set_level(logging.WARNING, logger="testenv.tests.event")
    lg.warning("some.event.code", extra={"reference": "r"})
    rec = next(r for r in caplog.records if r.name == "testenv.tests.event")
    assert getattr(rec, "event", None) == "some.event.code"
    assert getattr(rec, "reference", None) == "r"
