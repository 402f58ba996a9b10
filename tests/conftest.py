"""Shared pytest fixtures and test helpers for postctl tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from postctl.config.settings import PostSettings

WritePost = Callable[..., Path]


def post_text(
    title: str = "Hello",
    date: str = "2020-01-01 10:00",
    categories: str = "[A, B]",
    body: str = "Body text.\n",
) -> str:
    """Render a post in the Octopress front-matter style."""
    return (
        "---\n"
        "layout: post\n"
        f'title: "{title}"\n'
        f"date: {date}\n"
        "comments: true\n"
        f"categories: {categories}\n"
        "---\n"
        f"{body}"
    )


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's postctl.toml or POSTCTL_* env vars out of tests."""
    for name in ("POSTCTL_CONFIG", "POSTCTL_CORPUS__WORKERS", "POSTCTL_CORPUS__ON_MALFORMED"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def posts_dir(tmp_path: Path) -> Path:
    """Empty ``_posts`` directory inside a temporary site root."""
    path = tmp_path / "site" / "_posts"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def write_post(posts_dir: Path) -> WritePost:
    """Write a post file into ``posts_dir`` and return its path.

    Pass ``text=`` for raw content; otherwise keyword arguments go to
    :func:`post_text`.
    """

    def _write(name: str, text: str | None = None, **kwargs: str) -> Path:
        path = posts_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text if text is not None else post_text(**kwargs), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(tmp_path: Path) -> PostSettings:
    """Settings with code defaults only."""
    return PostSettings.from_cli(start=tmp_path)


@pytest.fixture
def site(write_post: WritePost, posts_dir: Path) -> Path:
    """A small site: three good posts, one malformed, and a ``_config.yml``.

    Returns the ``_posts`` directory.
    """
    (posts_dir.parent / "_config.yml").write_text(
        "title: Example Blog\nbaseurl: /blog\npermalink: pretty\npaginate: 2\n",
        encoding="utf-8",
    )
    write_post(
        "2020-01-01-hello.markdown",
        title="Hello",
        date="2020-01-01 10:00",
        categories="[Ruby, Rails]",
        body="First paragraph.\n\nSecond paragraph.\n",
    )
    write_post("2020-02-01-second.markdown", title="Second", date="2020-02-01", categories="[Ruby]")
    write_post("2021-03-01-third.markdown", title="Third", date="2021-03-01", categories="[Ember]")
    write_post("2021-04-01-broken.markdown", text="---\ntitle: Broken\n")
    return posts_dir
