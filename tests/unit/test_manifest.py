"""Tests for pegtrace.toml loading."""

from pathlib import Path

import pytest

from pegtrace.core.errors import ConfigError
from pegtrace.core.manifest import find_config, load_config, resolve_config


def write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "pegtrace.toml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_full_render_table(self, tmp_path: Path) -> None:
        path = write(
            tmp_path,
            """
[render]
output = "out/trace.html"
flatten = ["expr", "term"]
hide = ["_"]
context_before = 4
context_after = 40
title = "calc"
""",
        )
        config = load_config(path)
        assert config.path == path
        assert config.render.output == "out/trace.html"
        assert config.render.flatten == ["expr", "term"]
        assert config.render.hide == ["_"]
        assert config.render.context_before == 4
        assert config.render.context_after == 40
        assert config.render.title == "calc"

    def test_defaults_for_missing_keys(self, tmp_path: Path) -> None:
        config = load_config(write(tmp_path, "[render]\nhide = ['ws']\n"))
        assert config.render.output == "trace.html"
        assert config.render.flatten == []
        assert config.render.context_before == 10
        assert config.render.context_after == 25

    def test_wrong_type(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="context_after"):
            load_config(write(tmp_path, "[render]\ncontext_after = 'lots'\n"))

    def test_bool_is_not_an_integer(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            load_config(write(tmp_path, "[render]\ncontext_before = true\n"))

    def test_names_must_be_strings(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="flatten"):
            load_config(write(tmp_path, "[render]\nflatten = [1, 2]\n"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(write(tmp_path, "[render\n"))

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "absent.toml")


class TestFindConfig:
    def test_found_in_directory(self, tmp_path: Path) -> None:
        path = write(tmp_path, "")
        assert find_config(tmp_path) == path

    def test_absent(self, tmp_path: Path) -> None:
        assert find_config(tmp_path) is None

    def test_resolve_falls_back_to_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = resolve_config()
        assert config.path is None
        assert config.render.title == "PEG trace"
