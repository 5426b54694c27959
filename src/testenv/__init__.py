# SPDX-License-Identifier: GPL-3.0-only
"""testenv: individua la artifact root di un progetto a partire dal codice di riferimento."""

from .exceptions import ConfigError, LocationResolutionError, NoParentError, RootNotFoundError, TestEnvError
from .locator import EnvironmentLocator, is_wsl, os_info, user_home

__all__ = [
    "EnvironmentLocator",
    "TestEnvError",
    "ConfigError",
    "LocationResolutionError",
    "RootNotFoundError",
    "NoParentError",
    "is_wsl",
    "os_info",
    "user_home",
]
