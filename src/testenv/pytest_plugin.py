# SPDX-License-Identifier: GPL-3.0-only
# src/testenv/pytest_plugin.py
"""Plugin pytest (entry point `pytest11`): fixture `environment_locator` per il modulo di test."""

from __future__ import annotations

from typing import Any

import pytest

from .locator import EnvironmentLocator


def locator_for_request(request: Any) -> EnvironmentLocator:
    """Locator costruito dal file del modulo di test che richiede la fixture."""
    return EnvironmentLocator(request.module)


@pytest.fixture(scope="module")
def environment_locator(request: pytest.FixtureRequest) -> EnvironmentLocator:
    return locator_for_request(request)
