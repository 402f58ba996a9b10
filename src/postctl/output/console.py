"""Rich console and ``post.*`` theme used by every renderer.

Renderers draw into a Console backed by a StringIO buffer and hand back
the text, so ``AppContext.emit`` decides whether it goes to stdout or
stderr. Color is dropped when the buffer is not a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

# Styles for post listings: titles, dates, categories and counts.
POST_THEME = Theme(
    {
        "post.ok": "bold green",
        "post.error": "bold red",
        "post.warning": "bold yellow",
        "post.op": "bold cyan",
        "post.key": "dim",
        "post.path": "dim",
        "post.title": "bold",
        "post.date": "blue",
        "post.category": "magenta",
        "post.count": "bold magenta",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """A buffered Console with the post theme.

    Args:
        no_color: Strip ANSI codes from the rendered text.
        width: Column count for tables; DEFAULT_WIDTH when unset.
    """
    return Console(
        file=StringIO(),
        theme=POST_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Text rendered so far into *console*'s buffer."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()
