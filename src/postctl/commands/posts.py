"""Command: list posts newest first."""

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
  postctl posts source/_posts
  postctl posts source/_posts --category Rails
  postctl posts source/_posts --page 2
  postctl posts source/_posts --page 1 --per-page 5
  postctl -q posts source/_posts --category PostgreSQL""",
)
@INPUT_DIR
@click.option("--category", default=None, help="Only posts filed under this category.")
@click.option("--page", type=int, default=None, help="1-based page number.")
@click.option(
    "--per-page",
    type=int,
    default=None,
    help="Page size (default: the site's pagination size).",
)
@click.pass_obj
def posts(
    app: AppContext,
    input_dir: Path,
    category: str | None,
    page: int | None,
    per_page: int | None,
) -> None:
    """List posts in INPUT_DIR, newest first."""
    app.emit(app.corpus.list_posts(input_dir, category=category, page=page, per_page=per_page))
