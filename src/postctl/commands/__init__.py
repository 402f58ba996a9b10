"""Subcommand modules for postctl.

Provides register_commands() which uses deferred imports to keep
``postctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from postctl.commands.archive import archive
    from postctl.commands.build import build
    from postctl.commands.categories import categories
    from postctl.commands.posts import posts
    from postctl.commands.show import show

    cli.add_command(build)
    cli.add_command(posts)
    cli.add_command(categories)
    cli.add_command(archive)
    cli.add_command(show)
