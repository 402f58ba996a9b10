"""Jekyll site config (``_config.yml``) discovery and loading.

Only the keys the index needs are read: site identity, the permalink
pattern, the pagination size, and the ``exclude`` list. Everything else
in the file belongs to the renderer and is ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from postctl.config.discovery import find_upward
from postctl.domain.errors import SiteConfigError

SITE_CONFIG_FILENAME = "_config.yml"

# Jekyll's built-in permalink styles.
PERMALINK_STYLES: dict[str, str] = {
    "date": "/:categories/:year/:month/:day/:title:output_ext",
    "pretty": "/:categories/:year/:month/:day/:title/",
    "ordinal": "/:categories/:year/:y_day/:title:output_ext",
    "weekdate": "/:categories/:year/W:week/:short_day/:title:output_ext",
    "none": "/:categories/:title:output_ext",
}
DEFAULT_PERMALINK = PERMALINK_STYLES["date"]
DEFAULT_PER_PAGE = 10
SITE_CONFIG_SEARCH_LEVELS = 2


def _new_yaml() -> YAML:
    """Create a fresh safe YAML loader.

    Real-world configs repeat keys (``title:`` twice is common), which
    Jekyll tolerates with last-wins semantics, so duplicates are allowed.
    """
    y = YAML(typ="safe", pure=True)
    y.allow_duplicate_keys = True
    return y


class SiteConfig(BaseModel):
    """The parts of ``_config.yml`` that shape the index."""

    model_config = {"frozen": True}

    title: str = ""
    url: str = ""
    baseurl: str = ""
    permalink: str = DEFAULT_PERMALINK
    per_page: int = Field(default=DEFAULT_PER_PAGE, ge=1)
    exclude: list[str] = Field(default_factory=list)
    source: Path | None = None

    @property
    def root(self) -> Path | None:
        """The site root: the directory holding the config file."""
        return self.source.parent if self.source is not None else None


def find_site_config(start: Path, filename: str = SITE_CONFIG_FILENAME) -> Path | None:
    """Look for the site config in *start* and at most two of its parents.

    Jekyll keeps ``_config.yml`` next to ``_posts``; Octopress keeps it one
    level higher, above ``source/_posts``. Nothing further up belongs to
    the site.
    """
    return find_upward(start, filename, max_levels=SITE_CONFIG_SEARCH_LEVELS)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _per_page(data: dict[str, Any]) -> int:
    pagination = data.get("pagination")
    if isinstance(pagination, dict) and pagination.get("per_page"):
        return int(pagination["per_page"])
    # jekyll-paginate (v1) uses a top-level key.
    if data.get("paginate"):
        return int(data["paginate"])
    return DEFAULT_PER_PAGE


def load_site_config(path: Path | None) -> SiteConfig:
    """Load *path* into a :class:`SiteConfig`; defaults if *path* is None.

    Raises:
        SiteConfigError: If the file cannot be read or is not a YAML mapping.
    """
    if path is None:
        return SiteConfig()

    try:
        raw = path.read_text(encoding="utf-8")
        data = _new_yaml().load(raw)
    except (OSError, UnicodeDecodeError) as exc:
        raise SiteConfigError(f"cannot read site config: {exc}", path=str(path)) from exc
    except YAMLError as exc:
        raise SiteConfigError(f"invalid YAML: {exc}", path=str(path)) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SiteConfigError("site config must be a mapping", path=str(path))

    permalink = _text(data.get("permalink")) or DEFAULT_PERMALINK
    permalink = PERMALINK_STYLES.get(permalink, permalink)

    exclude = data.get("exclude") or []
    if not isinstance(exclude, list):
        exclude = [exclude]

    try:
        per_page = _per_page(data)
        return SiteConfig(
            title=_text(data.get("title")),
            url=_text(data.get("url")),
            baseurl=_text(data.get("baseurl")),
            permalink=permalink,
            per_page=per_page,
            exclude=[str(item) for item in exclude],
            source=path,
        )
    except (TypeError, ValueError) as exc:
        raise SiteConfigError(f"invalid site config: {exc}", path=str(path)) from exc
