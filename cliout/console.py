"""
Shared Rich Console singleton for terminal output.

Every line cliout writes goes through this one Console. It is bound to stderr,
not stdout, so a tool's real output can be piped or redirected while status
text, spinners and diagnostics stay on the terminal.

Why a singleton?
  - Rich's Console manages terminal state (width, color support, cursor position).
    Several Console instances on the same stream can fight over the cursor,
    which matters most while a Status spinner is animating.
  - Tests can swap the console in one place, or hand their own Console to
    ``Output``, and every write follows.

Usage:
    from .console import console
    console.print("[yellow]Warning: ...[/yellow]")
"""

from rich.console import Console

# The shared stderr console. Output, the spinner driver and the config layer
# all write through it.
console = Console(stderr=True)
