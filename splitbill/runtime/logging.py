"""Logging for splitbill.

Every module logs under the ``splitbill`` logger. The first ``get_logger``
call attaches a single stderr handler to it; ``SPLITBILL_LOG_LEVEL`` picks
the starting level and ``splitbill --verbose`` switches to DEBUG, which also
adds line numbers to each record.
"""

import logging
import os
import sys
from collections.abc import Mapping

ROOT_LOGGER_NAME = "splitbill"
DEFAULT_LOG_LEVEL = logging.INFO

LOG_FORMAT = "%(levelname)s [%(name)s] %(message)s"
LOG_FORMAT_DEBUG = "%(levelname)s [%(name)s:%(lineno)d] %(message)s"

_HANDLER_NAME = "splitbill-stderr"


def level_from_env(environ: Mapping[str, str] | None = None) -> int:
    """Read SPLITBILL_LOG_LEVEL; unknown or missing names give DEFAULT_LOG_LEVEL."""
    env = os.environ if environ is None else environ
    name = env.get("SPLITBILL_LOG_LEVEL", "").strip().upper()
    if name == "WARN":
        name = "WARNING"
    return logging.getLevelNamesMapping().get(name, DEFAULT_LOG_LEVEL)


def _own_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in logger.handlers if handler.get_name() == _HANDLER_NAME]


def set_log_level(level: int) -> None:
    """Change the namespace level; DEBUG also switches to the line-number format."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    fmt = LOG_FORMAT_DEBUG if level <= logging.DEBUG else LOG_FORMAT
    for handler in _own_handlers(root):
        handler.setFormatter(logging.Formatter(fmt))


def configure_logging(level: int | None = None) -> logging.Logger:
    """Attach the stderr handler once and return the namespace logger.

    An explicit ``level`` always applies; otherwise the environment is only
    consulted on first configuration.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not _own_handlers(root):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        root.addHandler(handler)
        root.propagate = False
        if level is None:
            level = level_from_env()
    if level is not None:
        set_log_level(level)
    return root


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` (usually ``__name__``) inside the splitbill namespace."""
    root = configure_logging()
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return root.getChild(name)
