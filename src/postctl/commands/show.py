"""Command: show one post."""

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
  postctl show source/_posts 2020-01-01-hello.markdown
  postctl show source/_posts hello
  postctl --json show source/_posts hello""",
)
@INPUT_DIR
@click.argument("post")
@click.pass_obj
def show(app: AppContext, input_dir: Path, post: str) -> None:
    """Show POST from INPUT_DIR, by relative path or by slug."""
    app.emit(app.corpus.show(input_dir, post))
