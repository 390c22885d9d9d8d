"""Shared configuration helpers and dataclasses."""

from .errors import ConfigurationError
from .runtime import env_bool, env_str
from .settings import (
    PROCESS_SOURCE_PS,
    PROCESS_SOURCE_PSUTIL,
    LifelineSettings,
    load_settings,
)

__all__ = [
    "ConfigurationError",
    "LifelineSettings",
    "PROCESS_SOURCE_PS",
    "PROCESS_SOURCE_PSUTIL",
    "env_bool",
    "env_str",
    "load_settings",
]
