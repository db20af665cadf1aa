"""Tests for configuration section types."""

import pathlib as _pathlib

import pytest as _pytest

import armory.config.types as types


class TestKindConfig:
    """Tests for KindConfig."""

    def test_defaults(self) -> None:
        section = types.KindConfig()
        assert section.project_dir == "skills"
        assert section.project_claude_dir == ".claude/skills"
        assert section.include_user is True

    def test_user_path_expands_tilde(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", "/home/tester")
        section = types.KindConfig(user_dir="~/agents")
        assert section.user_path() == _pathlib.Path("/home/tester/agents")


class TestExtraFields:
    """Unknown keys are kept and reported with dotted paths."""

    def test_top_level_extra(self) -> None:
        section = types.KindConfig(project_dri="typo")
        assert section.has_extra_fields()
        assert section.get_extra_fields() == {"project_dri": "typo"}

    def test_collect_with_prefix(self) -> None:
        section = types.KindConfig(include_usr=False)
        assert section.collect_all_extra_fields("skills") == {"skills.include_usr": False}

    def test_no_extras(self) -> None:
        assert types.LoggingConfig().collect_all_extra_fields() == {}


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_default_level(self) -> None:
        assert types.LoggingConfig().level == "warning"

    def test_rejects_unknown_level(self) -> None:
        with _pytest.raises(ValueError):
            types.LoggingConfig(level="loud")
