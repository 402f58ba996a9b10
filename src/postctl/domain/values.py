"""Front-matter scalar coercion and formatting.

A front-matter value is one of four variants:

- ``str``: the default for anything not matched below.
- ``bool``: bare ``true`` / ``false`` (case-insensitive).
- ``list[str]``: a flow list ``[a, b]`` or a block list of ``- item`` lines.
- ``datetime``: ``YYYY-MM-DD`` with an optional ``HH:MM[:SS[.ffffff]]`` part
  (space or ``T`` separated) and an optional ``Z`` / ``+HH:MM`` offset.

Quoted values (``"..."`` or ``'...'``) are always strings.
:func:`format_value` is the inverse of :func:`coerce_value`.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, timedelta, timezone

FrontMatterValue = str | bool | list[str] | datetime
FrontMatter = dict[str, FrontMatterValue]

_TIMESTAMP_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})"
    r"(?:[T ]\s*(?P<hour>\d{1,2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?)?"
    r"\s*(?P<tz>Z|[+-]\d{2}:?\d{2})?$"
)
_DOUBLE_ESCAPE_RE = re.compile(r'\\(["\\])')
_BOOLEANS = {"true": True, "false": False}
_LIST_FORBIDDEN = frozenset(",[]\n")


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def parse_timestamp(text: str) -> datetime | None:
    """Parse a front-matter timestamp, or return None if *text* is not one.

    Out-of-range components (``2020-13-01``, ``25:00``, an offset of a
    day or more) are not timestamps.
    """
    match = _TIMESTAMP_RE.match(text.strip())
    if match is None:
        return None

    try:
        day = date.fromisoformat(match["date"])
        fraction = match["fraction"] or "0"
        moment = datetime(
            day.year,
            day.month,
            day.day,
            int(match["hour"] or 0),
            int(match["minute"] or 0),
            int(match["second"] or 0),
            int(fraction[:6].ljust(6, "0")),
        )
        tz = match["tz"]
        if tz:
            moment = moment.replace(tzinfo=_parse_offset(tz))
    except ValueError:
        return None
    return moment


def _parse_offset(tz: str) -> timezone:
    if tz == "Z":
        return UTC
    sign = -1 if tz[0] == "-" else 1
    digits = tz[1:].replace(":", "")
    offset = timedelta(hours=int(digits[:2]), minutes=int(digits[2:]))
    return timezone(sign * offset)


def format_timestamp(moment: datetime) -> str:
    """Render *moment* in the ``YYYY-MM-DD HH:MM`` front-matter style.

    Seconds and microseconds are only written when non-zero.
    """
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f" {moment.hour:02d}:{moment.minute:02d}"
    )
    if moment.second or moment.microsecond:
        text += f":{moment.second:02d}"
    if moment.microsecond:
        text += f".{moment.microsecond:06d}"
    offset = moment.utcoffset()
    if offset is not None:
        total = int(offset.total_seconds()) // 60
        sign = "-" if total < 0 else "+"
        hours, minutes = divmod(abs(total), 60)
        text += f" {sign}{hours:02d}:{minutes:02d}"
    return text


def naive_utc(moment: datetime) -> datetime:
    """Normalize *moment* to a naive datetime for ordering.

    Naive values are taken to already be in UTC.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(UTC).replace(tzinfo=None)


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def _is_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'"


def unquote(text: str) -> str:
    """Strip one level of YAML-style quotes from *text*, if present."""
    if not _is_quoted(text):
        return text
    inner = text[1:-1]
    if text[0] == '"':
        return _DOUBLE_ESCAPE_RE.sub(r"\1", inner)
    return inner.replace("''", "'")


def parse_list(inner: str) -> list[str]:
    """Split the inside of a ``[...]`` flow list into trimmed strings.

    Empty items (``[a, , b]``) are dropped.
    """
    items: list[str] = []
    for part in inner.split(","):
        item = part.strip()
        if item:
            items.append(unquote(item))
    return items


def coerce_value(text: str) -> FrontMatterValue:
    """Coerce one raw front-matter value into its tagged variant.

    Raises:
        ValueError: If *text* opens a flow list that is never closed.
    """
    value = text.strip()
    if _is_quoted(value):
        return unquote(value)
    if value.startswith("["):
        if not value.endswith("]"):
            msg = f"unterminated list value: {value!r}"
            raise ValueError(msg)
        return parse_list(value[1:-1])
    boolean = _BOOLEANS.get(value.lower())
    if boolean is not None:
        return boolean
    moment = parse_timestamp(value)
    if moment is not None:
        return moment
    return value


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _needs_quotes(text: str) -> bool:
    if not text or text != text.strip():
        return True
    if text[0] in "[\"'#":
        return True
    if text.lower() in _BOOLEANS:
        return True
    return parse_timestamp(text) is not None


def format_value(value: FrontMatterValue) -> str:
    """Render *value* so that :func:`coerce_value` reads it back unchanged.

    Raises:
        ValueError: If a string contains a newline, or a list item contains
            ``,``, ``[`` or ``]`` or is empty.
        TypeError: If *value* is not a front-matter variant.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, list):
        rendered: list[str] = []
        for item in value:
            if not isinstance(item, str):
                msg = f"list items must be strings, got {type(item).__name__}"
                raise TypeError(msg)
            if not item or _LIST_FORBIDDEN.intersection(item):
                msg = f"list item cannot be represented: {item!r}"
                raise ValueError(msg)
            needs = item != item.strip() or item[0] in "\"'"
            rendered.append(_quote(item) if needs else item)
        return "[" + ", ".join(rendered) + "]"
    if isinstance(value, str):
        if "\n" in value or "\r" in value:
            msg = "front-matter strings cannot span lines"
            raise ValueError(msg)
        return _quote(value) if _needs_quotes(value) else value
    msg = f"unsupported front-matter value: {type(value).__name__}"
    raise TypeError(msg)
