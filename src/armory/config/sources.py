"""Custom pydantic-settings source for Armory configuration.

Configuration layers (in precedence order, highest first):
1. Environment variables (handled by pydantic-settings)
2. Project config: <project>/.armory/config.yaml
3. User config: ~/.config/armory/config.yaml (or $ARMORY_CONFIG_DIR/config.yaml)
4. Built-in defaults: the config.yaml bundled with the package

Nested mappings merge key by key; any other value in a higher layer
replaces the lower one outright (lists included).
"""

import collections.abc as _abc
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

ENV_CONFIG_DIR = "ARMORY_CONFIG_DIR"

PROJECT_CONFIG_DIR = ".armory"
CONFIG_FILENAME = "config.yaml"


class ConfigFileError(Exception):
    """A configuration file could not be read or parsed."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


class ConfigLayer(_typing.NamedTuple):
    """One YAML file taking part in the merge."""

    name: str
    path: _pathlib.Path
    required: bool = False


def deep_merge(
    base: _abc.Mapping[str, _typing.Any],
    override: _abc.Mapping[str, _typing.Any],
) -> dict[str, _typing.Any]:
    """
    Merge two config mappings, override winning.

    Neither input is modified.
    """
    merged: dict[str, _typing.Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, _abc.Mapping) and isinstance(value, _abc.Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def read_config_file(path: _pathlib.Path) -> dict[str, _typing.Any] | None:
    """
    Parse one config file.

    Returns:
        The top-level mapping, or None when the file holds no YAML document.

    Raises:
        ConfigFileError: Unreadable file, malformed YAML, or a top level
            that is not a mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigFileError(path, f"permission denied: {e}") from e
    except OSError as e:
        raise ConfigFileError(path, f"cannot read file: {e}") from e

    try:
        data = _yaml.safe_load(text)
    except _yaml.YAMLError as e:
        raise ConfigFileError(path, f"invalid YAML: {e}") from e

    if data is None:
        return None
    if not isinstance(data, dict):
        raise ConfigFileError(
            path, f"config must be a YAML mapping (dict), got {type(data).__name__}"
        )
    return data


class LayeredYamlSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that merges the built-in, user and project YAML files.

    The built-in defaults must exist and be non-empty; a problem there
    means a broken installation. The user and project files are optional.
    All files are read once, when the source is constructed.
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        project_root: _pathlib.Path | None = None,
        *,
        user_config_path: _pathlib.Path | None = None,
        builtin_config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Args:
            settings_cls: The Settings class being populated.
            project_root: Directory whose .armory/config.yaml is layered in.
                No project layer when None.
            user_config_path: User config file; defaults to
                get_user_config_path(). Tests pass a temporary file.
            builtin_config_path: Built-in defaults file; defaults to the
                bundled one. Tests pass a temporary file.
        """
        super().__init__(settings_cls)
        self._layers = self._build_layers(
            project_root,
            user_config_path or get_user_config_path(),
            builtin_config_path or get_builtin_defaults_path(),
        )
        self._loaded: list[ConfigLayer] = []
        self._merged = self._merge_layers()

    @staticmethod
    def _build_layers(
        project_root: _pathlib.Path | None,
        user_path: _pathlib.Path,
        builtin_path: _pathlib.Path,
    ) -> list[ConfigLayer]:
        # Lowest precedence first, the order they are merged in
        layers = [
            ConfigLayer("built-in", builtin_path, required=True),
            ConfigLayer("user", user_path),
        ]
        if project_root is not None:
            layers.append(ConfigLayer("project", get_project_config_path(project_root)))
        return layers

    def _merge_layers(self) -> dict[str, _typing.Any]:
        merged: dict[str, _typing.Any] = {}
        for layer in self._layers:
            if not layer.path.exists():
                if layer.required:
                    raise ConfigFileError(
                        layer.path,
                        "built-in defaults not found (possible installation problem)",
                    )
                continue

            data = read_config_file(layer.path)
            if not data:
                if layer.required:
                    raise ConfigFileError(
                        layer.path,
                        "built-in defaults file is empty (possible installation problem)",
                    )
                continue

            merged = deep_merge(merged, data)
            self._loaded.append(layer)
        return merged

    def get_loaded_layers(self) -> list[tuple[str, _pathlib.Path]]:
        """(name, path) of each layer that contributed values, highest first."""
        return [(layer.name, layer.path) for layer in reversed(self._loaded)]

    def get_layer_paths(self) -> list[tuple[str, _pathlib.Path, bool]]:
        """(name, path, exists) of every configured layer, highest first."""
        return [
            (layer.name, layer.path, layer.path.exists())
            for layer in reversed(self._layers)
        ]

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        value = self._merged.get(field_name)
        if value is None:
            return None, field_name, False
        return value, field_name, isinstance(value, (_abc.Mapping, list))

    def __call__(self) -> dict[str, _typing.Any]:
        """
        Return the merged config for pydantic validation.

        Unknown keys are included; Settings keeps them in model_extra.
        """
        return dict(self._merged)


def get_builtin_defaults_path() -> _pathlib.Path:
    """Path of the bundled defaults file."""
    return _pathlib.Path(__file__).parent / "defaults" / CONFIG_FILENAME


def get_user_config_dir() -> _pathlib.Path:
    """User config directory: $ARMORY_CONFIG_DIR, else ~/.config/armory."""
    if config_dir := _os.environ.get(ENV_CONFIG_DIR):
        return _pathlib.Path(config_dir)
    return _pathlib.Path.home() / ".config" / "armory"


def get_user_config_path() -> _pathlib.Path:
    return get_user_config_dir() / CONFIG_FILENAME


def get_project_config_path(project_root: _pathlib.Path) -> _pathlib.Path:
    """Path of <project_root>/.armory/config.yaml."""
    return project_root / PROJECT_CONFIG_DIR / CONFIG_FILENAME
