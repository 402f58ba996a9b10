"""Front-matter parsing and rendering.

A post opens with a line containing only ``---``; the block runs to the
next such line and holds ``key: value`` pairs. Everything after the
closing delimiter is the body, returned verbatim.

Malformed blocks raise :class:`MalformedDocumentError`. Whether the file
is then dropped or kept as plain body is the loader's decision, not the
parser's.
"""

from __future__ import annotations

import re

from postctl.domain.errors import MalformedDocumentError
from postctl.domain.values import FrontMatter, coerce_value, format_value, unquote

_DELIMITER = "---"
_BOM = "\ufeff"
_LIST_ITEM_RE = re.compile(r"^\s*-\s+(?P<item>\S.*?)\s*$")


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == _DELIMITER


def parse_front_matter(text: str) -> tuple[FrontMatter, str]:
    """Split *text* into ``(front_matter, body)``.

    Without a leading ``---`` line the front matter is empty and the body
    is *text* unchanged. Handles both ``\\n`` and ``\\r\\n`` line endings.

    Raises:
        MalformedDocumentError: If the block is never closed or holds a
            line that is not a ``key: value`` pair, comment, or list item.
    """
    content = text[1:] if text.startswith(_BOM) else text
    lines = content.split("\n")
    if not _is_delimiter(lines[0]):
        return {}, text

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if _is_delimiter(line):
            end_idx = i
            break

    if end_idx is None:
        raise MalformedDocumentError("front matter opened with '---' is never closed", line=1)

    front_matter = _parse_block(lines[1:end_idx], first_line=2)
    body = "\n".join(lines[end_idx + 1 :])
    return front_matter, body


def _parse_block(lines: list[str], *, first_line: int) -> FrontMatter:
    front_matter: FrontMatter = {}
    open_key: str | None = None

    for lineno, raw in enumerate(lines, start=first_line):
        line = raw.rstrip()
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        item = _LIST_ITEM_RE.match(line)
        if item is not None:
            if open_key is None:
                raise MalformedDocumentError("list item outside of a list key", line=lineno)
            current = front_matter[open_key]
            if not isinstance(current, list):
                current = []
                front_matter[open_key] = current
            current.append(unquote(item["item"]))
            continue

        if line[0].isspace():
            raise MalformedDocumentError("nested mappings are not supported", line=lineno)

        key, sep, raw_value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            msg = f"expected 'key: value', got {stripped!r}"
            raise MalformedDocumentError(msg, line=lineno)

        value = raw_value.strip()
        if not value:
            # Either an empty string or the head of a block list.
            front_matter[key] = ""
            open_key = key
            continue

        open_key = None
        try:
            front_matter[key] = coerce_value(value)
        except ValueError as exc:
            raise MalformedDocumentError(str(exc), line=lineno) from exc

    return front_matter


def _check_key(key: str) -> None:
    if not key or key != key.strip() or key[0] in "-#" or any(c in key for c in ":\r\n"):
        msg = f"front-matter key cannot be represented: {key!r}"
        raise ValueError(msg)


def render_front_matter(front_matter: FrontMatter, body: str) -> str:
    """Render *front_matter* and *body* back into post text.

    Keys keep their mapping order. The output always carries a block, even
    for an empty mapping, and *body* follows the closing delimiter as-is.

    Raises:
        ValueError: If a key or value has no front-matter representation.
    """
    parts = [_DELIMITER, "\n"]
    for key, value in front_matter.items():
        _check_key(key)
        parts.append(f"{key}: {format_value(value)}\n")
    parts.extend([_DELIMITER, "\n", body])
    return "".join(parts)
