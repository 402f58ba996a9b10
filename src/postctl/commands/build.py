"""Command: load a post directory and report what was indexed."""

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
  postctl build source/_posts
  postctl build source/_posts --on-malformed recover
  postctl build source/_posts --workers 8
  postctl --json build source/_posts""",
)
@INPUT_DIR
@click.option(
    "--on-malformed",
    type=click.Choice(["reject", "recover"]),
    default=None,
    help="Drop malformed posts, or keep them with their whole text as body.",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Parse posts on a thread pool of this size.",
)
@click.pass_obj
def build(
    app: AppContext,
    input_dir: Path,
    on_malformed: str | None,
    workers: int | None,
) -> None:
    """Build the corpus index for INPUT_DIR.

    Per-file failures are reported on stderr and do not change the exit
    code. Exits non-zero only when INPUT_DIR is missing, unreadable, or
    holds no posts.
    """
    app.emit(app.corpus.build(input_dir, on_malformed=on_malformed, workers=workers))
