"""Hyperlink rendering for warning and error action lines."""

from rich.style import Style
from rich.text import Text

from .config import DOCS_URL_TEMPLATE


def docs_url(slug: str, template: str = DOCS_URL_TEMPLATE) -> str:
    """Turn a documentation slug into its canonical troubleshooting URL.

    The template comes from CLIOUT_DOCS_URL_TEMPLATE and must contain a
    ``{slug}`` placeholder, e.g. ``https://err.sh/vercel/{slug}``.
    """
    return template.format(slug=slug)


def render_link(url: str) -> Text:
    """Render a URL as cyan text that is clickable where the terminal allows it.

    Rich emits an OSC 8 hyperlink for the ``link`` style only when the console
    is writing to a terminal, so redirected output keeps the bare URL.
    """
    return Text(url, style=Style(color="cyan", link=url))
