"""cliout - stderr status, warning, error and spinner output for command-line tools"""

from .config import (
    CLIOUT_DIR,
    CONFIG_FILE,
    DEBUG,
    DEFAULT_CONFIG,
    DOCS_URL_TEMPLATE,
    SPINNER_DELAY,
    get_bool_setting,
    get_docs_url_template,
    get_int_setting,
    get_setting,
    load_config,
)
from .console import console
from .link import docs_url, render_link
from .output import Output, create_output, reset_output
from .wait import Spinner, wait

__all__ = [
    # Config
    "CLIOUT_DIR",
    "CONFIG_FILE",
    "DEBUG",
    "DEFAULT_CONFIG",
    "DOCS_URL_TEMPLATE",
    "SPINNER_DELAY",
    "get_bool_setting",
    "get_docs_url_template",
    "get_int_setting",
    "get_setting",
    "load_config",
    # Console
    "console",
    # Links
    "docs_url",
    "render_link",
    # Output
    "Output",
    "create_output",
    "reset_output",
    # Spinner
    "Spinner",
    "wait",
]
