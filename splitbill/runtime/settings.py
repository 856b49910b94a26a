"""Runtime settings for the parse service, server and display.

Resolution order (later wins):
    1. Built-in defaults
    2. TOML file at $SPLITBILL_CONFIG, else ./splitbill.toml (``[splitbill]`` table)
    3. Environment variables
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from splitbill.runtime.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_FILENAME = "splitbill.toml"

# Environment variable -> settings field
_ENV_FIELDS = {
    "OPENROUTER_API_KEY": "api_key",
    "COMPLETION_MODEL": "model",
    "SPLITBILL_API_URL": "api_url",
    "SPLITBILL_TIMEOUT": "timeout",
    "SPLITBILL_LOCALE": "locale",
    "SPLITBILL_CURRENCY": "currency",
}


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    api_url: str = "https://openrouter.ai/api/v1"
    api_key: str | None = None
    model: str | None = None
    timeout: float = 60.0
    max_image_bytes: int = 10 * 1024 * 1024
    locale: str | None = None
    currency: str | None = None

    @property
    def completions_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/chat/completions"


def _coerce(name: str, value: Any) -> Any:
    if name == "timeout":
        return float(value)
    if name == "max_image_bytes":
        return int(value)
    return str(value)


def _config_path() -> Path:
    override = os.environ.get("SPLITBILL_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path.cwd() / DEFAULT_CONFIG_FILENAME


def load_settings_file(path: Path) -> dict[str, Any]:
    """Read the ``[splitbill]`` table of a TOML settings file.

    Returns an empty dict when the file does not exist; unknown keys are dropped.
    """
    if not path.exists():
        return {}

    with open(path, "rb") as f:
        data = tomllib.load(f)

    table = data.get("splitbill", {})
    known = {f.name for f in fields(Settings)}
    values: dict[str, Any] = {}
    for key, value in table.items():
        if key not in known:
            logger.warning("Ignoring unknown setting %r in %s", key, path)
            continue
        values[key] = _coerce(key, value)
    return values


def load_settings(environ: dict[str, str] | None = None, config_path: Path | None = None) -> Settings:
    env = os.environ if environ is None else environ
    path = config_path if config_path is not None else _config_path()

    settings = replace(Settings(), **load_settings_file(path))

    overrides: dict[str, Any] = {}
    for var, name in _ENV_FIELDS.items():
        value = env.get(var)
        if value:
            overrides[name] = _coerce(name, value)
    if "locale" not in overrides and not settings.locale and env.get("LANG"):
        overrides["locale"] = env["LANG"]

    return replace(settings, **overrides)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the process-wide Settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
