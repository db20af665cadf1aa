"""Tests for the layered YAML settings source.

Tests for LayeredYamlSettingsSource:
- Loading the bundled defaults
- Merge order across builtin, user and project layers
- Handling missing, empty and malformed files
"""

import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings
import pytest as _pytest

import armory.config.sources as sources


class MinimalSettings(_pydantic_settings.BaseSettings):
    """Minimal settings class for exercising the source."""

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="TEST_",
        extra="ignore",
    )

    version: int = 0
    skills: dict[str, _typing.Any] = _pydantic.Field(default_factory=dict)


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_mappings_merge(self) -> None:
        merged = sources.deep_merge(
            {"skills": {"project_dir": "skills", "include_user": True}, "version": 1},
            {"skills": {"include_user": False}},
        )
        assert merged == {
            "skills": {"project_dir": "skills", "include_user": False},
            "version": 1,
        }

    def test_non_mapping_values_replace(self) -> None:
        merged = sources.deep_merge({"a": [1, 2], "b": {"c": 1}}, {"a": [3], "b": "flat"})
        assert merged == {"a": [3], "b": "flat"}

    def test_inputs_untouched(self) -> None:
        base = {"a": {"b": 1}}
        sources.deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestHelperFunctions:
    """Tests for path helper functions."""

    def test_get_builtin_defaults_path(self) -> None:
        """Should return path to defaults/config.yaml."""
        path = sources.get_builtin_defaults_path()
        assert path.name == "config.yaml"
        assert path.parent.name == "defaults"
        assert path.exists()

    def test_get_user_config_path_default(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Without env var, should return XDG-compliant user config path."""
        monkeypatch.delenv("ARMORY_CONFIG_DIR", raising=False)
        path = sources.get_user_config_path()
        assert path == _pathlib.Path.home() / ".config" / "armory" / "config.yaml"

    def test_get_user_config_path_with_env_var(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """With env var set, should use that directory."""
        monkeypatch.setenv("ARMORY_CONFIG_DIR", "/custom/config/dir")
        assert sources.get_user_config_path() == _pathlib.Path("/custom/config/dir/config.yaml")
        assert sources.get_user_config_dir() == _pathlib.Path("/custom/config/dir")

    def test_get_project_config_path(self) -> None:
        project_root = _pathlib.Path("/some/project")
        path = sources.get_project_config_path(project_root)
        assert path == project_root / ".armory" / "config.yaml"


class TestLayeredYamlSettingsSource:
    """Tests for loading and merging config layers."""

    def _source(
        self,
        tmp_path: _pathlib.Path,
        *,
        builtin: str | None = "version: 1\n",
        user: str | None = None,
        project: str | None = None,
    ) -> sources.LayeredYamlSettingsSource:
        builtin_path = tmp_path / "builtin.yaml"
        if builtin is not None:
            builtin_path.write_text(builtin)
        user_path = tmp_path / "user.yaml"
        if user is not None:
            user_path.write_text(user)
        project_root = tmp_path / "project"
        if project is not None:
            (project_root / ".armory").mkdir(parents=True)
            (project_root / ".armory" / "config.yaml").write_text(project)
        return sources.LayeredYamlSettingsSource(
            MinimalSettings,
            project_root=project_root,
            user_config_path=user_path,
            builtin_config_path=builtin_path,
        )

    def test_is_pydantic_settings_source(self) -> None:
        assert issubclass(
            sources.LayeredYamlSettingsSource,
            _pydantic_settings.PydanticBaseSettingsSource,
        )

    def test_bundled_defaults(self, tmp_path: _pathlib.Path) -> None:
        source = sources.LayeredYamlSettingsSource(
            MinimalSettings, user_config_path=tmp_path / "none.yaml"
        )
        result = source()
        assert result["version"] == 1
        assert result["skills"]["project_dir"] == "skills"
        assert result["agents"]["project_claude_dir"] == ".claude/agents"

    def test_override_chain(self, tmp_path: _pathlib.Path) -> None:
        """Project overrides user which overrides builtin."""
        source = self._source(
            tmp_path,
            builtin="version: 100\nskills:\n  project_dir: skills\n  include_user: true\n",
            user="version: 200\nskills:\n  include_user: false\n",
            project="version: 300\n",
        )
        result = source()

        assert result["version"] == 300
        assert result["skills"] == {"project_dir": "skills", "include_user": False}
        assert [name for name, _ in source.get_loaded_layers()] == [
            "project",
            "user",
            "built-in",
        ]

    def test_missing_optional_layers(self, tmp_path: _pathlib.Path) -> None:
        source = self._source(tmp_path)
        assert source() == {"version": 1}
        assert [name for name, _ in source.get_loaded_layers()] == ["built-in"]
        layers = {name: exists for name, _, exists in source.get_layer_paths()}
        assert layers == {"project": False, "user": False, "built-in": True}

    def test_empty_user_file_is_ignored(self, tmp_path: _pathlib.Path) -> None:
        source = self._source(tmp_path, user="")
        assert source() == {"version": 1}

    def test_missing_builtin(self, tmp_path: _pathlib.Path) -> None:
        with _pytest.raises(sources.ConfigFileError, match="not found"):
            self._source(tmp_path, builtin=None)

    def test_empty_builtin(self, tmp_path: _pathlib.Path) -> None:
        with _pytest.raises(sources.ConfigFileError, match="empty"):
            self._source(tmp_path, builtin="")

    def test_malformed_yaml(self, tmp_path: _pathlib.Path) -> None:
        with _pytest.raises(sources.ConfigFileError, match="invalid YAML") as exc_info:
            self._source(tmp_path, user="skills: [unclosed\n")
        assert exc_info.value.path == tmp_path / "user.yaml"

    def test_non_mapping_top_level(self, tmp_path: _pathlib.Path) -> None:
        with _pytest.raises(sources.ConfigFileError, match="mapping"):
            self._source(tmp_path, project="- a\n- b\n")

    def test_get_field_value(self, tmp_path: _pathlib.Path) -> None:
        source = self._source(tmp_path, builtin="version: 2\nskills:\n  a: 1\n")
        assert source.get_field_value(None, "version") == (2, "version", False)  # type: ignore[arg-type]
        assert source.get_field_value(None, "skills") == ({"a": 1}, "skills", True)  # type: ignore[arg-type]
        assert source.get_field_value(None, "missing") == (None, "missing", False)  # type: ignore[arg-type]
