"""Walk-up discovery of postctl's own ``postctl.toml``.

The file is looked for the way git looks for ``.git/``: in the starting
directory, then in each parent. ``POSTCTL_CONFIG`` names a file directly
and disables the walk; the ``--config`` flag bypasses discovery entirely.

:func:`find_upward` is shared with the site ``_config.yml`` lookup, which
uses a bounded walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "postctl.toml"
CONFIG_ENV_VAR = "POSTCTL_CONFIG"


def find_upward(start: Path, filename: str, *, max_levels: int | None = None) -> Path | None:
    """Return the first *filename* found in *start* or one of its parents.

    Args:
        start: Directory to begin in.
        filename: File name to look for.
        max_levels: How many parents to climb past *start*; None means up
            to the filesystem root.
    """
    current = start.resolve()
    level = 0
    while True:
        candidate = current / filename
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current or (max_levels is not None and level >= max_levels):
            return None
        current = parent
        level += 1


def find_config(start: Path | None = None) -> Path | None:
    """Locate ``postctl.toml`` for a run started in *start* (default: cwd).

    A set ``POSTCTL_CONFIG`` wins: its file is returned if it exists, and
    None otherwise, without falling back to the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None
    return find_upward(start or Path.cwd(), CONFIG_FILENAME)
