"""Tests for CorpusService operations."""

from pathlib import Path

import pytest

from postctl.config.settings import PostSettings
from postctl.services.corpus import CorpusService


@pytest.fixture
def service(settings: PostSettings) -> CorpusService:
    return CorpusService(settings)


class TestBuild:
    def test_counts_and_failures(self, service: CorpusService, site: Path) -> None:
        result = service.build(site)
        assert result.ok
        assert result.data["site_title"] == "Example Blog"
        assert result.data["count"] == 3
        assert result.data["category_count"] == 3
        assert result.data["failure_count"] == 1
        assert result.data["newest"] == "2021-03-01T00:00:00"
        assert result.data["oldest"] == "2020-01-01T10:00:00"
        [failure] = result.data["failures"]
        assert failure["path"] == "2021-04-01-broken.markdown"
        assert failure["code"] == "MALFORMED_DOCUMENT"
        assert failure["line"] == 1
        assert result.warnings == [
            "2021-04-01-broken.markdown: front matter opened with '---' is never closed (line 1)"
        ]
        assert "duration_ms" in result.meta  # type: ignore[operator]

    def test_recover_policy(self, service: CorpusService, site: Path) -> None:
        result = service.build(site, on_malformed="recover")
        assert result.data["count"] == 4
        assert result.data["failure_count"] == 1

    def test_policy_from_settings(self, tmp_path: Path, site: Path) -> None:
        (tmp_path / "postctl.toml").write_text('[corpus]\non_malformed = "recover"\n')
        service = CorpusService(PostSettings.from_cli(start=tmp_path))
        assert service.build(site).data["count"] == 4

    def test_exclude_from_site_config(self, service: CorpusService, site: Path) -> None:
        (site.parent / "_config.yml").write_text("exclude: ['*broken*']\n", encoding="utf-8")
        result = service.build(site)
        assert result.data["count"] == 3
        assert result.data["failure_count"] == 0
        assert result.warnings == []

    def test_site_config_can_be_disabled(self, tmp_path: Path, site: Path) -> None:
        (tmp_path / "postctl.toml").write_text("[site]\nuse_site_config = false\n")
        service = CorpusService(PostSettings.from_cli(start=tmp_path))
        assert service.build(site).data["site_title"] == ""

    def test_missing_directory(self, service: CorpusService, tmp_path: Path) -> None:
        result = service.build(tmp_path / "missing")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNREADABLE_FILE"

    def test_empty_directory(self, service: CorpusService, posts_dir: Path) -> None:
        result = service.build(posts_dir)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "EMPTY_INPUT"
        assert result.error.detail["input_dir"] == str(posts_dir)

    def test_invalid_site_config_falls_back_to_defaults(
        self, service: CorpusService, site: Path
    ) -> None:
        (site.parent / "_config.yml").write_text("title: [oops\n", encoding="utf-8")
        result = service.build(site)
        assert result.ok
        assert result.data["site_title"] == ""
        assert result.data["count"] == 3
        site_warning = result.warnings[0]
        assert "_config.yml" in site_warning
        assert site_warning.endswith("(using defaults)")
        assert len(result.warnings) == 2

    def test_exclude_relative_to_site_root(self, service: CorpusService, site: Path) -> None:
        (site.parent / "_config.yml").write_text("exclude: [_posts/drafts/]\n", encoding="utf-8")
        drafts = site / "drafts"
        drafts.mkdir()
        (drafts / "2020-01-02-d.md").write_text("---\ntitle: D\n---\nBody\n", encoding="utf-8")
        result = service.list_posts(site)
        assert "drafts/2020-01-02-d.md" not in [item["path"] for item in result.data["items"]]
        assert result.data["count"] == 3


class TestListPosts:
    def test_all_newest_first(self, service: CorpusService, site: Path) -> None:
        result = service.list_posts(site)
        assert [item["title"] for item in result.data["items"]] == ["Third", "Second", "Hello"]
        assert result.data["count"] == 3
        assert "page" not in result.data
        assert len(result.warnings) == 1

    def test_summary_fields(self, service: CorpusService, site: Path) -> None:
        hello = service.list_posts(site).data["items"][-1]
        assert hello == {
            "path": "2020-01-01-hello.markdown",
            "title": "Hello",
            "date": "2020-01-01T10:00:00",
            "layout": "post",
            "categories": ["Ruby", "Rails"],
            "comments": True,
            "slug": "hello",
            "url": "/blog/ruby/rails/2020/01/01/hello/",
        }

    def test_category(self, service: CorpusService, site: Path) -> None:
        result = service.list_posts(site, category="Ruby")
        assert [item["title"] for item in result.data["items"]] == ["Second", "Hello"]

    def test_unknown_category(self, service: CorpusService, site: Path) -> None:
        result = service.list_posts(site, category="Python")
        assert result.ok
        assert result.data["items"] == []

    def test_page_uses_site_page_size(self, service: CorpusService, site: Path) -> None:
        result = service.list_posts(site, page=2)
        assert [item["title"] for item in result.data["items"]] == ["Hello"]
        assert result.data["per_page"] == 2
        assert result.data["total_pages"] == 2
        assert result.data["total"] == 3

    def test_per_page_alone_starts_at_first_page(self, service: CorpusService, site: Path) -> None:
        result = service.list_posts(site, per_page=1)
        assert result.data["page"] == 1
        assert [item["title"] for item in result.data["items"]] == ["Third"]

    def test_invalid_page(self, service: CorpusService, site: Path) -> None:
        result = service.list_posts(site, page=0)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_PAGE"


class TestCategories:
    def test_counts(self, service: CorpusService, site: Path) -> None:
        result = service.categories(site)
        assert result.data["items"] == [
            {"category": "Ruby", "count": 2},
            {"category": "Ember", "count": 1},
            {"category": "Rails", "count": 1},
        ]
        assert result.data["count"] == 3


class TestArchive:
    def test_grouped_by_year(self, service: CorpusService, site: Path) -> None:
        result = service.archive(site)
        years = result.data["years"]
        assert [y["year"] for y in years] == [2021, 2020]
        assert [y["count"] for y in years] == [1, 2]
        assert [item["title"] for item in years[1]["items"]] == ["Second", "Hello"]
        assert result.data["count"] == 3


class TestShow:
    def test_by_path(self, service: CorpusService, site: Path) -> None:
        result = service.show(site, "2020-01-01-hello.markdown")
        assert result.ok
        assert result.data["title"] == "Hello"
        assert result.data["front_matter"]["date"] == "2020-01-01T10:00:00"
        assert result.data["front_matter"]["categories"] == ["Ruby", "Rails"]
        assert result.data["excerpt"] == "First paragraph."
        assert result.data["body"] == "First paragraph.\n\nSecond paragraph.\n"

    def test_by_slug(self, service: CorpusService, site: Path) -> None:
        result = service.show(site, "third")
        assert result.data["path"] == "2021-03-01-third.markdown"

    def test_not_found(self, service: CorpusService, site: Path) -> None:
        result = service.show(site, "2021-04-01-broken.markdown")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {"path": "2021-04-01-broken.markdown"}
