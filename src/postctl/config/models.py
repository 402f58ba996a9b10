"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, postctl.toml only contains overrides.
A fresh site needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- postctl.toml sections ---


class CorpusConfig(BaseModel):
    """[corpus] section."""

    model_config = {"frozen": True}

    extensions: list[str] = Field(default_factory=lambda: [".md", ".markdown"])
    exclude: list[str] = Field(default_factory=list)
    on_malformed: Literal["reject", "recover"] = "reject"
    workers: int = Field(default=1, ge=1)


class SiteConfigSection(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    config_file: str = "_config.yml"
    use_site_config: bool = True
