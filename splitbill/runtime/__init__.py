"""Runtime infrastructure for splitbill.

This package provides process/runtime services including:
- Logging setup via get_logger()
- Settings resolution via get_settings(), Settings

Usage:
    from splitbill.runtime import get_logger, get_settings

    logger = get_logger(__name__)
    settings = get_settings()
    print(settings.completions_url)
"""

from splitbill.runtime.logging import (
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_FORMAT_DEBUG,
    configure_logging,
    get_logger,
    level_from_env,
    set_log_level,
)
from splitbill.runtime.settings import Settings, get_settings, load_settings, reset_settings

__all__ = [
    # Logging
    "get_logger",
    "configure_logging",
    "set_log_level",
    "level_from_env",
    "DEFAULT_LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FORMAT_DEBUG",
    # Settings
    "Settings",
    "get_settings",
    "load_settings",
    "reset_settings",
]
