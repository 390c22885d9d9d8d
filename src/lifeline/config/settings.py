"""Lifeline settings resolved from the environment."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .errors import ConfigurationError
from .runtime import env_bool, env_str

PROCESS_SOURCE_PS = "ps"
PROCESS_SOURCE_PSUTIL = "psutil"
PROCESS_SOURCES = (PROCESS_SOURCE_PS, PROCESS_SOURCE_PSUTIL)

DEFAULT_PS_COMMAND = "ps ax -o pid,command"
DEFAULT_TERMINATE_MARKER = "python"


@dataclass(frozen=True)
class LifelineSettings:
    """Resolved runtime settings for snapshots, termination and logging."""

    process_source: str = PROCESS_SOURCE_PS
    ps_command: Tuple[str, ...] = tuple(shlex.split(DEFAULT_PS_COMMAND))
    terminate_marker: str = DEFAULT_TERMINATE_MARKER
    quiet: bool = False
    log_dir: Optional[Path] = None
    log_append: bool = False


def _resolve_process_source() -> str:
    source = env_str("LIFELINE_PROCESS_SOURCE", or_value=PROCESS_SOURCE_PS).lower()
    if source not in PROCESS_SOURCES:
        raise ConfigurationError.invalid_value(
            "LIFELINE_PROCESS_SOURCE",
            source,
            f"Expected one of {', '.join(PROCESS_SOURCES)}",
        )
    return source


def _resolve_ps_command() -> Tuple[str, ...]:
    raw = env_str("LIFELINE_PS_COMMAND", or_value=DEFAULT_PS_COMMAND)
    try:
        parts = tuple(shlex.split(raw))
    except ValueError as exc:
        raise ConfigurationError.invalid_value("LIFELINE_PS_COMMAND", raw, str(exc)) from exc
    if not parts:
        raise ConfigurationError.missing_value("LIFELINE_PS_COMMAND")
    return parts


def _resolve_log_dir() -> Optional[Path]:
    raw = env_str("LIFELINE_LOG_DIR")
    if raw is None:
        return None
    return Path(raw).expanduser()


def load_settings() -> LifelineSettings:
    """Read settings from the environment, falling back to ``.env`` defaults.

    Raises:
        ConfigurationError: If any variable holds an unusable value
    """
    return LifelineSettings(
        process_source=_resolve_process_source(),
        ps_command=_resolve_ps_command(),
        terminate_marker=env_str("LIFELINE_TERMINATE_MARKER", or_value=DEFAULT_TERMINATE_MARKER),
        quiet=bool(env_bool("LIFELINE_QUIET", or_value=False)),
        log_dir=_resolve_log_dir(),
        log_append=bool(env_bool("LIFELINE_LOG_APPEND", or_value=False)),
    )


__all__ = [
    "DEFAULT_PS_COMMAND",
    "DEFAULT_TERMINATE_MARKER",
    "LifelineSettings",
    "PROCESS_SOURCES",
    "PROCESS_SOURCE_PS",
    "PROCESS_SOURCE_PSUTIL",
    "load_settings",
]
