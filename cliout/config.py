"""
Settings for cliout.

Three knobs, each looked up in the environment (a ``.env`` file is loaded
first), then in ``~/.cliout/config.json``, then in DEFAULT_CONFIG:

  CLIOUT_DEBUG              debug flag used when create_output() gets none
  CLIOUT_DOCS_URL_TEMPLATE  doc-slug URL template, must contain ``{slug}``
  CLIOUT_SPINNER_DELAY      milliseconds before a spinner appears

A bad value is reported on the console and replaced by its default. Nothing
in here raises: broken settings must never keep a tool from printing.
"""

import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from rich.text import Text

from .console import console

load_dotenv()

DEFAULT_CONFIG = {
    "CLIOUT_DEBUG": "false",
    "CLIOUT_DOCS_URL_TEMPLATE": "https://err.sh/vercel/{slug}",
    "CLIOUT_SPINNER_DELAY": "300",
}

CLIOUT_DIR = Path(os.getenv("CLIOUT_DIR", str(Path.home() / ".cliout")))
CONFIG_FILE = Path(os.getenv("CLIOUT_CONFIG_FILE", str(CLIOUT_DIR / "config.json")))

_TRUE = ("true", "1", "yes", "on")
_FALSE = ("false", "0", "no", "off", "")


def _warn(message: str):
    # Text, not markup: paths and values may contain square brackets.
    console.print(Text(f"Warning: {message}", style="yellow"))


def load_config(config_file: Path | None = None) -> dict[str, Any]:
    """Read the JSON config file. Missing means empty; unreadable is reported."""
    path = config_file or CONFIG_FILE
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        _warn(f"Ignoring config file {path}: {e}")
        return {}
    if not isinstance(config, dict):
        _warn(f"Ignoring config file {path}: expected a JSON object")
        return {}
    return config


def get_setting(key: str, default: str | None = None) -> str:
    """Resolve ``key`` from the environment, the config file, then the default.

    ``default`` falls back to the DEFAULT_CONFIG entry for CLIOUT_* keys.
    """
    if default is None:
        default = DEFAULT_CONFIG[key]

    env_val = os.getenv(key)
    if env_val:
        return env_val

    config = load_config()
    if key in config:
        return str(config[key])

    return default


def get_int_setting(key: str, default: int) -> int:
    """Non-negative integer setting, e.g. a delay in milliseconds."""
    value = get_setting(key, str(default))
    try:
        number = int(value)
    except ValueError:
        number = -1
    if number < 0:
        _warn(f"{key} must be a non-negative integer, got {value!r}; using {default}")
        return default
    return number


def get_bool_setting(key: str, default: bool) -> bool:
    value = get_setting(key, str(default).lower()).strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    _warn(f"{key} must be true or false, got {value!r}; using {str(default).lower()}")
    return default


def get_docs_url_template() -> str:
    template = get_setting("CLIOUT_DOCS_URL_TEMPLATE").strip()
    if "{slug}" not in template:
        _warn(f"CLIOUT_DOCS_URL_TEMPLATE has no {{slug}} placeholder: {template!r}; using default")
        return DEFAULT_CONFIG["CLIOUT_DOCS_URL_TEMPLATE"]
    return template


DEBUG = get_bool_setting("CLIOUT_DEBUG", False)
DOCS_URL_TEMPLATE = get_docs_url_template()
SPINNER_DELAY = get_int_setting("CLIOUT_SPINNER_DELAY", int(DEFAULT_CONFIG["CLIOUT_SPINNER_DELAY"]))
