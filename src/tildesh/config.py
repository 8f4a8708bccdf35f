"""Configuration for tildesh."""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tildesh.models import ShellConfig

log = logging.getLogger(__name__)

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "ShellConfig",
    "load_config",
]

CONFIG_DIR = Path.home() / ".tildesh"
CONFIG_FILE = CONFIG_DIR / "config.json"
BOOLEAN_TRUE_STRINGS = {"1", "true", "yes", "on"}
BOOLEAN_FALSE_STRINGS = {"0", "false", "no", "off"}
INT_ENV_OVERRIDES = {
    "TILDESH_MAX_TOKENS": "max_tokens",
    "TILDESH_PATH_MAX": "path_max",
}


def _read_config_file() -> dict[str, Any]:
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE) as f:
            loaded = json.load(f)
    except json.JSONDecodeError as exc:
        log.warning(
            "invalid config JSON in %s (%s); falling back to defaults",
            CONFIG_FILE,
            exc,
        )
        return {}
    except OSError as exc:
        log.warning("cannot read %s (%s); falling back to defaults", CONFIG_FILE, exc)
        return {}
    if not isinstance(loaded, dict):
        log.warning("config in %s is not a JSON object; falling back to defaults", CONFIG_FILE)
        return {}
    log.debug("loaded config from %s", CONFIG_FILE)
    return loaded


def load_config() -> ShellConfig:
    """Load config from file, with env var overrides.

    Reads ``~/.tildesh/config.json`` and applies environment variable
    overrides (``TILDESH_COLOR``, ``TILDESH_MAX_TOKENS`` and
    ``TILDESH_PATH_MAX``). Falls back to defaults when the file is absent,
    contains invalid JSON, or holds values that fail validation.

    Returns:
        The resolved ``ShellConfig`` instance.
    """
    raw_config = _read_config_file()

    if color_raw := os.environ.get("TILDESH_COLOR"):
        normalized = color_raw.strip().lower()
        if normalized in BOOLEAN_TRUE_STRINGS:
            raw_config["color"] = True
        elif normalized in BOOLEAN_FALSE_STRINGS:
            raw_config["color"] = False
        else:
            log.warning("ignoring TILDESH_COLOR=%r: expected a boolean", color_raw)

    for env_key, field in INT_ENV_OVERRIDES.items():
        if value_raw := os.environ.get(env_key):
            try:
                raw_config[field] = int(value_raw)
            except ValueError:
                log.warning("ignoring %s=%r: expected an integer", env_key, value_raw)

    try:
        return ShellConfig.model_validate(raw_config)
    except ValidationError as exc:
        log.warning("invalid config values (%s); falling back to defaults", exc)
        return ShellConfig()
