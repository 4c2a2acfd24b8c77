# stylejit/ui/spinner.py
from __future__ import annotations

from contextlib import contextmanager, nullcontext

from rich.errors import LiveError

from stylejit.ui import console

_DEFAULT = "dots"  # Rich built-ins: "dots", "line", "earth", …


class _NoOp:
    def update(self, *_a, **_kw): ...
    def __enter__(self):
        return self

    def __exit__(self, *_e): ...


@contextmanager
def safe_status(
    *args,
    message: str | None = None,
    spinner: str | None = None,
):
    """
    Universal status / spinner.

    Examples
    --------
    >>> with safe_status("Building…"):
    ...     do_work()
    >>> with safe_status(message="[cyan]Rebuilding…[/cyan]", spinner="line") as st:
    ...     st.update("Still rebuilding…")
    """
    if args and message:
        raise TypeError("Give the message either positionally or by keyword, not both")
    if args:
        message = str(args[0])
    message = message or "Working…"

    status = console.status(message, spinner=spinner or _DEFAULT)
    # Nested spinners raise LiveError → degrade to a silent surrogate
    try:
        status.start()
    except LiveError:
        with nullcontext(_NoOp()) as st:
            yield st
        return

    try:
        yield status
    finally:
        status.stop()
