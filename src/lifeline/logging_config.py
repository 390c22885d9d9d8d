"""
Centralized logging configuration for lifeline entry points.

Provides a single setup_logging function that configures:
- Console output on stdout
- Optional file output to $LIFELINE_LOG_DIR/{service_name}.log
- Fresh log file on each start unless LIFELINE_LOG_APPEND is set
"""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import Optional, Union

from lifeline.config import ConfigurationError, LifelineSettings, load_settings

# Thread-safe lock for logging configuration
_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _close_handlers(logger: logging.Logger) -> None:
    """Close all handlers for a logger, logging any errors."""
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", logger.name, e)
    logger.handlers = []


def _build_console_handler(level: int) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    console_handler.setLevel(level)
    return console_handler


def _configure_file_handler(service_name: Optional[str], settings: LifelineSettings) -> Optional[logging.Handler]:
    if not service_name or settings.log_dir is None:
        return None

    logs_dir: Path = settings.log_dir
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"{service_name}.log"
    file_mode = "a" if settings.log_append else "w"

    file_handler = logging.handlers.WatchedFileHandler(log_path, mode=file_mode)
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    file_handler.setLevel(logging.INFO)
    return file_handler


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("psutil").setLevel(logging.WARNING)


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ConfigurationError.invalid_value("log level", level)
    return resolved


def setup_logging(
    service_name: Optional[str] = None,
    level: Union[int, str] = logging.INFO,
    settings: Optional[LifelineSettings] = None,
) -> None:
    """Configure the root logger for a lifeline process.

    Args:
        service_name: Name used for the log file; no file is written without it
        level: Console and root log level
        settings: Settings to read the log directory from; loaded from the environment when omitted
    """
    resolved_level = _resolve_level(level)
    settings = settings or load_settings()

    with _config_lock:
        root_logger = logging.getLogger()
        _close_handlers(root_logger)

        root_logger.addHandler(_build_console_handler(resolved_level))

        file_handler = _configure_file_handler(service_name, settings)
        if file_handler:
            root_logger.addHandler(file_handler)

        root_logger.setLevel(resolved_level)
        _suppress_noisy_third_parties()


__all__ = ["setup_logging"]
