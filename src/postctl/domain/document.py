"""Document model — one post: its path, front matter, and body.

Attributes are what the file holds; everything a site renderer derives
from them (slug, effective date, categories, excerpt, URL) is exposed as a
read-only property so the stored front matter stays exactly as parsed.

Missing keys are never errors:

- ``date`` falls back to the ``YYYY-MM-DD-`` prefix of the file name.
- ``title`` falls back to the slug, title-cased.
- ``categories`` defaults to empty; a bare string is split on whitespace.
- ``comments`` defaults to ``False``; ``layout`` to ``""``.
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import PurePosixPath

from pydantic import BaseModel, Field

from postctl.domain.frontmatter import parse_front_matter, render_front_matter
from postctl.domain.values import FrontMatterValue

MORE_MARKER = "<!--more-->"

_FILENAME_RE = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)$")
_PLACEHOLDER_RE = re.compile(r":([a-z_]+)")
_PARAGRAPH_BREAK_RE = re.compile(r"\n[ \t]*\r?\n")
_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_DASH_RE = re.compile(r"[\s_-]+")
_DATE_PLACEHOLDERS = (
    "year",
    "short_year",
    "month",
    "i_month",
    "day",
    "i_day",
    "hour",
    "minute",
    "second",
    "y_day",
    "week",
    "short_day",
)


def slugify(text: str) -> str:
    """Lowercase *text* and collapse non-word runs into single dashes."""
    cleaned = _SLUG_STRIP_RE.sub("", text.lower())
    return _SLUG_DASH_RE.sub("-", cleaned).strip("-")


class Document(BaseModel):
    """A single parsed post. Immutable once read."""

    model_config = {"frozen": True}

    path: str
    front_matter: dict[str, FrontMatterValue] = Field(default_factory=dict)
    body: str = ""

    @classmethod
    def from_text(cls, path: str, text: str) -> Document:
        """Parse raw post *text* stored at *path*.

        Raises:
            MalformedDocumentError: If the front-matter block is malformed.
        """
        front_matter, body = parse_front_matter(text)
        return cls(path=path, front_matter=front_matter, body=body)

    def to_text(self) -> str:
        """Render the document back into post text."""
        return render_front_matter(self.front_matter, self.body)

    # --- File name -----------------------------------------------------

    @property
    def stem(self) -> str:
        return PurePosixPath(self.path.replace("\\", "/")).stem

    @property
    def filename_date(self) -> datetime | None:
        """Midnight of the ``YYYY-MM-DD`` file-name prefix, if valid."""
        match = _FILENAME_RE.match(self.stem)
        if match is None:
            return None
        try:
            return datetime(int(match["year"]), int(match["month"]), int(match["day"]))
        except ValueError:
            return None

    @property
    def slug(self) -> str:
        explicit = self.front_matter.get("slug")
        if isinstance(explicit, str) and explicit:
            return explicit
        match = _FILENAME_RE.match(self.stem)
        return match["slug"] if match else self.stem

    # --- Modeled front-matter fields -----------------------------------

    @property
    def layout(self) -> str:
        value = self.front_matter.get("layout")
        return value if isinstance(value, str) else ""

    @property
    def title(self) -> str:
        value = self.front_matter.get("title")
        if isinstance(value, str) and value:
            return value
        return self.slug.replace("-", " ").title()

    @property
    def date(self) -> datetime | None:
        """The authoritative ``date`` timestamp, else the file-name date."""
        value = self.front_matter.get("date")
        if isinstance(value, datetime):
            return value
        return self.filename_date

    @property
    def comments(self) -> bool:
        return self.front_matter.get("comments") is True

    @property
    def categories(self) -> list[str]:
        """Categories in declaration order, without duplicates."""
        found: list[str] = []
        for key in ("categories", "category"):
            value = self.front_matter.get(key)
            if isinstance(value, list):
                found.extend(value)
            elif isinstance(value, str):
                found.extend(value.split())
        return list(dict.fromkeys(found))

    def in_category(self, category: str) -> bool:
        return category in self.categories

    # --- Rendering helpers ---------------------------------------------

    @property
    def excerpt(self) -> str:
        """Text before ``<!--more-->``, or the first paragraph without it."""
        head, marker, _ = self.body.partition(MORE_MARKER)
        if marker:
            return head.strip()
        stripped = self.body.strip()
        if not stripped:
            return ""
        return _PARAGRAPH_BREAK_RE.split(stripped, maxsplit=1)[0].strip()

    def url(self, permalink: str) -> str:
        """Expand a Jekyll permalink pattern for this document.

        Unknown placeholders are left as-is. Empty segments (for example
        ``:categories`` on an uncategorized post) collapse away.
        """
        values = self._permalink_values()

        def _sub(match: re.Match[str]) -> str:
            name = match.group(1)
            return values.get(name, match.group(0))

        expanded = _PLACEHOLDER_RE.sub(_sub, permalink)
        collapsed = re.sub(r"/{2,}", "/", expanded)
        if not collapsed.startswith("/"):
            collapsed = "/" + collapsed
        return collapsed

    def _permalink_values(self) -> dict[str, str]:
        values: dict[str, str] = {
            "title": self.slug,
            "slug": self.slug,
            "categories": "/".join(slugify(c) for c in self.categories),
            "output_ext": ".html",
        }
        moment = self.date
        stamp: dict[str, str]
        if moment is not None:
            stamp = {
                "year": f"{moment.year:04d}",
                "short_year": f"{moment.year % 100:02d}",
                "month": f"{moment.month:02d}",
                "i_month": str(moment.month),
                "day": f"{moment.day:02d}",
                "i_day": str(moment.day),
                "hour": f"{moment.hour:02d}",
                "minute": f"{moment.minute:02d}",
                "second": f"{moment.second:02d}",
                "y_day": f"{moment.timetuple().tm_yday:03d}",
                "week": f"{moment.isocalendar().week:02d}",
                "short_day": moment.strftime("%a"),
            }
        else:
            stamp = dict.fromkeys(_DATE_PLACEHOLDERS, "")
        values.update(stamp)
        return values
