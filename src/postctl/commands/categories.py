"""Command: list categories with post counts."""

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
  postctl categories source/_posts
  postctl --json categories source/_posts""",
)
@INPUT_DIR
@click.pass_obj
def categories(app: AppContext, input_dir: Path) -> None:
    """List every category in INPUT_DIR with its post count."""
    app.emit(app.corpus.categories(input_dir))
