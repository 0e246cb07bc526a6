"""
The process-wide output channel.

``Output`` is the one place a command-line tool writes human-facing text:
status lines, warnings, errors, ready/success banners, debug traces, and a
single in-place spinner. Everything lands on stderr (see console.py) so the
tool's real output on stdout stays clean.

The spinner problem:
  A Rich Status spinner redraws its line from a background thread. If we
  print while it is animating, the next frame can overwrite our text or
  leave half a frame in front of it. So every write in this module goes
  through ``Output.print``, and ``print`` stops the spinner first. The
  channel is therefore always in one of two states:

    Idle      no spinner handle
    Spinning  one handle, created by set_spinner()

  and the only way back to Idle is stop_spinner(), which every write calls.
  A second set_spinner() while Spinning just changes the text.

Debug mode:
  With debug enabled, spinners are never started. Their lifecycle is traced
  as ``[debug]`` lines instead, which keeps the trace output readable and
  makes every step visible in logs captured from CI.

Usage:
    from cliout import create_output

    output = create_output(debug=args.debug)
    output.set_spinner("Deploying")
    result = await output.time("Upload", upload())
    output.success(f"Deployed {result.url}")
"""

from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime, timezone
from time import monotonic
from typing import Any, Protocol, TypeVar

from rich import box
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.text import Text

from .config import DEBUG, DOCS_URL_TEMPLATE, SPINNER_DELAY
from .console import console as default_console
from .link import docs_url, render_link
from .wait import wait

T = TypeVar("T")

# Style for the "> " marker and other de-emphasised text.
MUTED = "grey50"


class SpinnerHandle(Protocol):
    text: str

    def stop(self) -> None: ...


SpinnerFactory = Callable[[str, int], SpinnerHandle]


class Output:
    """Formatter for status, warning, error and debug output on stderr.

    Use ``create_output()`` to get the shared instance. The constructor takes
    its collaborators (console, spinner driver, docs URL template) explicitly
    so tests can hand in fakes.
    """

    def __init__(
        self,
        debug: bool = False,
        console: Console | None = None,
        spinner_factory: SpinnerFactory | None = None,
        docs_url_template: str = DOCS_URL_TEMPLATE,
    ):
        self._debug_enabled = debug
        self.console = console or default_console
        self.docs_url_template = docs_url_template
        self._spinner_factory = spinner_factory or self._start_spinner
        self._spinner: SpinnerHandle | None = None
        self.spinner_message = ""

    def _start_spinner(self, message: str, delay: int) -> SpinnerHandle:
        return wait(message, delay, console=self.console)

    def is_debug_enabled(self) -> bool:
        return self._debug_enabled

    # -- writing -----------------------------------------------------------

    def print(self, text: RenderableType):
        """Stop any spinner, then write ``text`` with no trailing newline.

        A plain string goes straight to the console's stream, byte for byte:
        no markup, no emoji codes, and control characters such as ``\\r`` are
        kept. Rich renderables (``Text``, ``Panel``) are rendered by the console.
        """
        self.stop_spinner()
        if isinstance(text, str):
            self.console.file.write(text)
            self.console.file.flush()
            return
        self.console.print(
            text,
            end="",
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=isinstance(text, Text),
        )

    def log(self, text: str | Text, style: str = MUTED):
        self.print(Text.assemble((">", style), " ", text, "\n"))

    def dim(self, text: str | Text, style: str = MUTED):
        self.print(Text.assemble(Text.assemble("> ", text, style=style), "\n"))

    def note(self, text: str | Text):
        self.log(Text.assemble(("NOTE:", "bold yellow"), " ", text))

    def _details(self, slug: str | None, link: str | None) -> str | None:
        # A slug always wins over a raw link.
        if slug:
            return docs_url(slug, self.docs_url_template)
        return link

    def warn(
        self,
        text: str | Text,
        slug: str | None = None,
        link: str | None = None,
        action: str = "Learn More",
        panel_options: Mapping[str, Any] | None = None,
    ):
        """Write a yellow bordered warning box.

        Args:
            text: The warning message.
            slug: Documentation slug, expanded with the docs URL template.
            link: Raw URL, used only when no slug is given.
            action: Label in front of the link.
            panel_options: Keyword overrides for the ``rich.panel.Panel``
                (e.g. ``{"border_style": "red", "title": "Deprecated"}``).
        """
        details = self._details(slug, link)
        content = Text.assemble(("WARN! ", "bold yellow"), text)
        if details:
            content.append(f"\n{action}: ")
            content.append_text(render_link(details))

        options: dict[str, Any] = {
            "box": box.ROUNDED,
            "padding": (0, 1),
            "border_style": "yellow",
            "expand": False,
        }
        options.update(panel_options or {})
        self.print(Panel(content, **options))
        self.print("\n")

    def error(
        self,
        text: str | Text,
        slug: str | None = None,
        link: str | None = None,
        action: str = "Learn More",
    ):
        self.print(Text.assemble(("Error!", "red"), " ", text, "\n"))
        details = self._details(slug, link)
        if details:
            self.print(Text.assemble((action, "bold"), ": ", render_link(details), "\n"))

    def pretty_error(self, err: Any):
        """Report an error-like object through ``error()``.

        ``err`` may be a mapping or any object with a ``message`` attribute,
        and may carry ``link`` and ``action``. Plain exceptions without a
        ``message`` fall back to ``str(err)``.
        """
        if isinstance(err, Mapping):
            message = err.get("message")
            link = err.get("link")
            action = err.get("action")
        else:
            message = getattr(err, "message", None)
            link = getattr(err, "link", None)
            action = getattr(err, "action", None)
        if message is None:
            message = str(err)
        return self.error(str(message), None, link, action or "Learn More")

    def ready(self, text: str | Text):
        self.print(Text.assemble(("> Ready!", "cyan"), " ", text, "\n"))

    def success(self, text: str | Text):
        self.print(Text.assemble(("> Success!", "cyan"), " ", text, "\n"))

    def debug(self, text: str | Text):
        if not self._debug_enabled:
            return
        # Same shape as JavaScript's Date.toISOString(): UTC, milliseconds, "Z".
        timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        timestamp = timestamp.replace("+00:00", "Z")
        self.log(Text.assemble(("[debug]", "bold"), " ", (f"[{timestamp}]", MUTED), " ", text))

    # -- spinner -----------------------------------------------------------

    def set_spinner(self, message: str, delay: int = SPINNER_DELAY):
        if self._debug_enabled:
            # Trace before recording, otherwise the debug write would stop
            # (and trace) the spinner it is announcing.
            self.debug(f"Spinner invoked ({message}) with a {delay}ms delay")
            self.spinner_message = message
            return

        self.spinner_message = message
        if self._spinner is not None:
            self._spinner.text = message
        else:
            self._spinner = self._spinner_factory(message, delay)

    spinner = set_spinner

    def stop_spinner(self):
        if self._debug_enabled and self.spinner_message:
            msg = f"Spinner stopped ({self.spinner_message})"
            self.spinner_message = ""
            self.debug(msg)
        if self._spinner is not None:
            handle, self._spinner = self._spinner, None
            handle.stop()
            self.spinner_message = ""

    # -- timing ------------------------------------------------------------

    async def time(
        self,
        label: str | Callable[[T | None], str],
        task: Awaitable[T] | Callable[[], Awaitable[T]],
    ) -> T:
        """Await ``task`` and, in debug mode, trace how long it took.

        ``task`` is either an awaitable that is already under way or a
        zero-argument callable producing one. ``label`` is a string or a
        callable; the callable gets ``None`` for the start trace and the
        task's result for the end trace. A failing task propagates as-is and
        produces no end trace.
        """
        awaitable = task() if callable(task) else task

        if not self._debug_enabled:
            return await awaitable

        self.debug(label(None) if callable(label) else label)
        start = monotonic()
        result = await awaitable
        end_label = label(result) if callable(label) else label
        duration = round((monotonic() - start) * 1000)
        pretty = f"{duration}ms" if duration < 1000 else f"{duration / 1000:.2f}s"
        self.debug(Text.assemble(end_label, " ", (f"[{pretty}]", MUTED)))
        return result


_instance: Output | None = None


def create_output(debug: bool | None = None, **kwargs: Any) -> Output:
    """Return the process-wide ``Output``, creating it on the first call.

    Only the first call's arguments matter; later calls get the same object.
    When ``debug`` is not given, CLIOUT_DEBUG decides.
    """
    global _instance
    if _instance is None:
        _instance = Output(debug=DEBUG if debug is None else debug, **kwargs)
    return _instance


def reset_output():
    """Drop the shared instance, stopping its spinner. Meant for tests."""
    global _instance
    if _instance is not None:
        _instance.stop_spinner()
    _instance = None
