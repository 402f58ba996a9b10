"""Command: posts grouped by year."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from postctl.commands._base import INPUT_DIR, PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    cls=PostCommand,
    examples="""\
  postctl archive source/_posts
  postctl -q archive source/_posts""",
)
@INPUT_DIR
@click.pass_obj
def archive(app: AppContext, input_dir: Path) -> None:
    """Show the posts in INPUT_DIR grouped by year."""
    app.emit(app.corpus.archive(input_dir))
