"""Tests for postctl.toml discovery."""

from pathlib import Path

import pytest

from postctl.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config, find_upward


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[corpus]\nworkers = 2\n")
        assert find_config(tmp_path) == config_file

    def test_defaults_to_cwd(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        assert find_config() == config_file.resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[corpus]\nworkers = 2\n")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path) == config_file

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None


class TestFindUpward:
    def test_unbounded_reaches_ancestors(self, tmp_path: Path) -> None:
        target = tmp_path / "marker.txt"
        target.write_text("")
        child = tmp_path / "a" / "b" / "c" / "d"
        child.mkdir(parents=True)
        assert find_upward(child, "marker.txt") == target

    def test_max_levels_limits_the_climb(self, tmp_path: Path) -> None:
        target = tmp_path / "marker.txt"
        target.write_text("")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        assert find_upward(child, "marker.txt", max_levels=2) == target
        assert find_upward(child, "marker.txt", max_levels=1) is None
        assert find_upward(tmp_path, "marker.txt", max_levels=0) == target

    def test_directories_do_not_match(self, tmp_path: Path) -> None:
        (tmp_path / "marker.txt").mkdir()
        assert find_upward(tmp_path, "marker.txt", max_levels=0) is None
