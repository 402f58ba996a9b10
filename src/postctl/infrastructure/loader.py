"""Corpus loading — read every post, parse it, and build the index.

Per-file problems never abort a build. Unreadable files and malformed
front matter are recorded as :class:`LoadFailure` pairs on the returned
index and logged. Only the directory-level errors raised
by :func:`~postctl.infrastructure.filesystem.find_post_files` are fatal.

Each file is parsed independently, so parsing can run on a thread pool.
Results are collected in input order and aggregated once, after every
parse has finished.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from enum import StrEnum
from functools import partial
from pathlib import Path

from postctl.domain.document import Document
from postctl.domain.errors import CorpusError, MalformedDocumentError
from postctl.domain.index import CorpusIndex, LoadFailure
from postctl.infrastructure.filesystem import (
    DEFAULT_EXTENSIONS,
    find_post_files,
    read_post_file,
)

logger = logging.getLogger(__name__)

_Outcome = tuple[Document | None, LoadFailure | None]


class MalformedPolicy(StrEnum):
    """What to do with a file whose front matter is malformed.

    Either way the error is recorded on the index.
    """

    REJECT = "reject"
    """Leave the file out of the index."""

    RECOVER = "recover"
    """Keep the file with empty front matter and its whole text as body."""


def _identify(location: Path, root: Path | None) -> str:
    if root is not None:
        try:
            return location.relative_to(root).as_posix()
        except ValueError:
            pass
    return location.as_posix()


def _record(identifier: str, error: CorpusError) -> LoadFailure:
    error.path = identifier
    logger.info("Skipping post: %s", error)
    return LoadFailure(identifier, error)


def _load_one(location: Path, identifier: str, *, on_malformed: MalformedPolicy) -> _Outcome:
    try:
        text = read_post_file(location)
    except CorpusError as exc:
        return None, _record(identifier, exc)

    try:
        return Document.from_text(identifier, text), None
    except MalformedDocumentError as exc:
        failure = _record(identifier, exc)
        if on_malformed is MalformedPolicy.RECOVER:
            return Document(path=identifier, body=text), failure
        return None, failure


def load(
    paths: Iterable[Path | str],
    *,
    root: Path | None = None,
    on_malformed: MalformedPolicy | str = MalformedPolicy.REJECT,
    workers: int = 1,
) -> CorpusIndex:
    """Read every path into a :class:`CorpusIndex`.

    Args:
        paths: Post file locations.
        root: When given, document paths are recorded relative to it.
        on_malformed: Policy for files with malformed front matter.
        workers: Parse on a thread pool of this size when greater than 1.
    """
    policy = MalformedPolicy(on_malformed)
    locations: Sequence[Path] = [Path(p) for p in paths]
    identifiers = [_identify(location, root) for location in locations]
    parse = partial(_load_one, on_malformed=policy)

    outcomes: list[_Outcome]
    if workers > 1 and len(locations) > 1:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="postctl-load") as pool:
            outcomes = list(pool.map(parse, locations, identifiers))
    else:
        outcomes = [
            parse(location, identifier)
            for location, identifier in zip(locations, identifiers, strict=True)
        ]

    documents: list[Document] = []
    failures: list[LoadFailure] = []
    for document, failure in outcomes:
        if document is not None:
            documents.append(document)
        if failure is not None:
            failures.append(failure)

    logger.debug(
        "Loaded %d documents (%d failures) from %d paths",
        len(documents),
        len(failures),
        len(locations),
    )
    return CorpusIndex(documents, failures)


def load_directory(
    root: Path,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude: Iterable[str] = (),
    site_root: Path | None = None,
    site_exclude: Iterable[str] = (),
    on_malformed: MalformedPolicy | str = MalformedPolicy.REJECT,
    workers: int = 1,
) -> CorpusIndex:
    """Discover and load every post under *root*.

    Discovery options are those of
    :func:`~postctl.infrastructure.filesystem.find_post_files`.

    Raises:
        UnreadableFileError: If *root* is not a readable directory.
        EmptyInputError: If *root* holds no candidate files.
    """
    files = find_post_files(
        root,
        extensions=extensions,
        exclude=exclude,
        site_root=site_root,
        site_exclude=site_exclude,
    )
    logger.debug("Discovered %d post files under %s", len(files), root)
    return load(files, root=root, on_malformed=on_malformed, workers=workers)
