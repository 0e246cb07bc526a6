"""
Delayed status spinner built on Rich's Status display.

A spinner that appears instantly for work that finishes in a few milliseconds
just flickers. ``wait()`` therefore arms a timer and only starts the Rich
animation once ``delay`` milliseconds have passed; a ``stop()`` before then
means nothing is ever drawn.

Rich's Status already redraws from its own refresh thread. The only extra
thread here is the one-shot ``threading.Timer`` for the delayed start, and a
lock keeps that start from racing a ``stop()`` issued from the caller.
"""

import threading

from rich.console import Console
from rich.status import Status
from rich.text import Text

from .console import console as default_console


class Spinner:
    """Handle for one animated status line.

    Set ``text`` to change the message in place and call ``stop()`` to clear
    the line. Both work whether or not the delayed start has fired yet.
    """

    def __init__(self, message: str, delay: int = 300, console: Console | None = None):
        self._message = message
        self._status: Status = (console or default_console).status(
            Text(message, style="bold green"), spinner="dots"
        )
        self._lock = threading.Lock()
        self._started = False
        self._stopped = False
        self._timer = threading.Timer(max(delay, 0) / 1000, self._start)
        self._timer.daemon = True
        self._timer.start()

    def _start(self):
        with self._lock:
            if self._stopped:
                return
            self._status.start()
            self._started = True

    @property
    def text(self) -> str:
        return self._message

    @text.setter
    def text(self, message: str):
        self._message = message
        self._status.update(status=Text(message, style="bold green"))

    @property
    def running(self) -> bool:
        return self._started and not self._stopped

    def stop(self):
        """Cancel a pending start or halt the animation. Safe to call twice."""
        self._timer.cancel()
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            if self._started:
                self._status.stop()


def wait(message: str, delay: int = 300, console: Console | None = None) -> Spinner:
    """Start a spinner showing ``message`` after ``delay`` milliseconds."""
    return Spinner(message, delay, console=console)
