"""Filesystem access for the post store.

INVARIANT: The store is read-only input. Nothing in this module writes.

Discovery walks the input directory recursively, skipping hidden
directories, Jekyll's build output, and any ``exclude`` glob. A glob is
matched against a file's relative path and against each of its parent
directories, so ``vendor/`` excludes everything below it. ``exclude``
globs are relative to the input directory; ``site_exclude`` globs come
from ``_config.yml`` and are relative to the site root, as in Jekyll.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath

from postctl.domain.errors import EmptyInputError, UnreadableFileError

DEFAULT_EXTENSIONS: tuple[str, ...] = (".md", ".markdown")

# Directories to skip when discovering post files.
_SKIP_DIRS = frozenset({"_site", "node_modules", "vendor"})


def _is_excluded(relative: PurePosixPath, patterns: Iterable[str]) -> bool:
    parts = relative.parts
    prefixes = ["/".join(parts[: i + 1]) for i in range(len(parts))]
    for pattern in patterns:
        normalized = pattern.strip().rstrip("/")
        if not normalized:
            continue
        if any(fnmatch(prefix, normalized) for prefix in prefixes):
            return True
    return False


def _offset_in(root: Path, site_root: Path | None) -> PurePosixPath | None:
    """Where *root* sits below *site_root*, or None if it is not below it."""
    if site_root is None:
        return None
    try:
        return PurePosixPath(root.resolve().relative_to(site_root.resolve()).as_posix())
    except ValueError:
        return None


def find_post_files(
    root: Path,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude: Iterable[str] = (),
    site_root: Path | None = None,
    site_exclude: Iterable[str] = (),
) -> list[Path]:
    """Discover all candidate post files under *root*, sorted by path.

    Args:
        root: The input directory.
        extensions: File suffixes to accept, case-insensitively.
        exclude: Globs relative to *root*.
        site_root: Directory the *site_exclude* globs are relative to.
        site_exclude: Globs relative to *site_root*; ignored when *root*
            is not inside *site_root*.

    Raises:
        UnreadableFileError: If *root* is not a readable directory.
        EmptyInputError: If no candidate files are found.
    """
    if not root.is_dir():
        raise UnreadableFileError("input directory does not exist", path=str(root))
    if not os.access(root, os.R_OK | os.X_OK):
        raise UnreadableFileError("input directory is not readable", path=str(root))

    suffixes = {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}
    patterns = list(exclude)
    site_patterns = list(site_exclude)
    offset = _offset_in(root, site_root) if site_patterns else None

    results: list[Path] = []
    for path in root.rglob("*"):
        if not path.is_file() or path.suffix.lower() not in suffixes:
            continue
        if path.name.startswith("."):
            continue
        relative = PurePosixPath(path.relative_to(root).as_posix())
        directories = relative.parts[:-1]
        if any(part.startswith(".") or part in _SKIP_DIRS for part in directories):
            continue
        if _is_excluded(relative, patterns):
            continue
        if offset is not None and _is_excluded(offset / relative, site_patterns):
            continue
        results.append(path)

    if not results:
        wanted = ", ".join(sorted(suffixes))
        raise EmptyInputError(f"no post files ({wanted}) found", path=str(root))

    return sorted(results)


def read_post_file(path: Path) -> str:
    """Read a post as UTF-8 text.

    Raises:
        UnreadableFileError: If the file cannot be opened or decoded.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise UnreadableFileError(f"not valid UTF-8: {exc.reason}", path=str(path)) from exc
    except OSError as exc:
        reason = exc.strerror or exc.__class__.__name__
        raise UnreadableFileError(reason, path=str(path)) from exc
