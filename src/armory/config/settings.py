"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with ARMORY_ prefix
3. .env file (only when ARMORY_ENV_FILE names one)
4. Layered YAML config files:
   - Project config: .armory/config.yaml (highest)
   - User config: ~/.config/armory/config.yaml
   - Built-in defaults: bundled defaults/config.yaml (lowest)

Nested config uses double underscore delimiter:
  ARMORY_SKILLS__INCLUDE_USER=false
  ARMORY_LOGGING__LEVEL=debug
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import armory.config.sources as sources
import armory.config.types as types
import armory.resources.discovery as discovery
import armory.resources.resource as resource_module

ENV_PROJECT_ROOT = "ARMORY_PROJECT_ROOT"


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only ARMORY_ENV_FILE is honored. When it is set but the file does not
    exist, nothing is loaded rather than falling back silently.
    """
    if env_file := _os.environ.get("ARMORY_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


def _config_project_root() -> _pathlib.Path:
    """Project directory whose .armory/config.yaml is layered in."""
    if project_root := _os.environ.get(ENV_PROJECT_ROOT):
        return _pathlib.Path(project_root).expanduser()
    return _pathlib.Path.cwd()


def _default_agents_config() -> types.KindConfig:
    return types.KindConfig(
        project_dir="agents",
        project_claude_dir=".claude/agents",
        user_dir="~/.claude/agents",
    )


class Settings(_pydantic_settings.BaseSettings):
    """
    Armory configuration settings.

    All settings can be overridden via environment variables with ARMORY_ prefix.
    For nested config, use double underscore: ARMORY_AGENTS__USER_DIR=/opt/agents

    Config precedence (highest to lowest):
    1. Constructor arguments
    2. Environment variables (ARMORY_*)
    3. .env file
    4. Project config (.armory/config.yaml)
    5. User config (~/.config/armory/config.yaml)
    6. Built-in defaults
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="ARMORY_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # ARMORY_SKILLS__INCLUDE_USER
        extra="allow",  # Preserve unknown fields for config auditing
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args) (highest)
        2. env_settings (ARMORY_* env vars)
        3. dotenv_settings (.env file)
        4. yaml_settings (layered config.yaml files)
        5. (defaults via Field definitions) (lowest)
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            sources.LayeredYamlSettingsSource(settings_cls, _config_project_root()),
            file_secret_settings,
        )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing issues without .env
        interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    # =========================================================================
    # Config version (for future migrations)
    # =========================================================================

    version: int = _pydantic.Field(default=1, description="Config schema version")

    # =========================================================================
    # Nested config sections
    # =========================================================================

    skills: types.KindConfig = _pydantic.Field(default_factory=types.KindConfig)
    """Skill search directories."""

    agents: types.KindConfig = _pydantic.Field(default_factory=_default_agents_config)
    """Subagent search directories."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging settings."""

    project_root: str | None = _pydantic.Field(
        default=None,
        description="Base for relative project directories (default: current directory)",
    )

    # =========================================================================
    # Search roots
    # =========================================================================

    def project_path(self) -> _pathlib.Path:
        """Base directory for relative project directories."""
        if self.project_root:
            return _pathlib.Path(self.project_root).expanduser()
        return _pathlib.Path(".")

    def kind_config(self, kind_dir: str) -> types.KindConfig:
        """
        Get the search directory section for a kind.

        Raises:
            ValueError: kind_dir is neither "skills" nor "agents".
        """
        if kind_dir == "skills":
            return self.skills
        if kind_dir == "agents":
            return self.agents
        raise ValueError(f"unknown resource kind directory: {kind_dir!r}")

    def search_roots(self, kind_dir: str) -> list[discovery.SearchRoot]:
        """
        Build the search roots for a kind, highest priority first.

        Args:
            kind_dir: "skills" or "agents".

        Returns:
            Project, project .claude and (unless disabled) user roots.
        """
        section = self.kind_config(kind_dir)
        project = self.project_path()

        roots = [
            discovery.SearchRoot(
                str(project / _pathlib.Path(section.project_dir).expanduser()),
                resource_module.SourceType.PROJECT,
            ),
            discovery.SearchRoot(
                str(project / _pathlib.Path(section.project_claude_dir).expanduser()),
                resource_module.SourceType.PROJECT_CLAUDE,
            ),
        ]
        if section.include_user:
            roots.append(
                discovery.SearchRoot(
                    str(section.user_path()), resource_module.SourceType.USER
                )
            )
        return roots

    # =========================================================================
    # Introspection (for config auditing)
    # =========================================================================

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Unknown keys at the top level."""
        return dict(self.model_extra or {})

    def collect_all_extra_fields(self) -> dict[str, _typing.Any]:
        """
        Unknown keys anywhere in the config, as dotted paths.

        e.g. {"skills.include_usr": False, "loging": {"level": "debug"}}
        """
        collected = self.get_extra_fields()
        for section_name in ("skills", "agents", "logging"):
            section: types.ConfigBase = getattr(self, section_name)
            collected.update(section.collect_all_extra_fields(section_name))
        return collected

    def has_extra_fields(self) -> bool:
        return bool(self.collect_all_extra_fields())

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, _typing.Any]:
        """Resolved settings with search roots expanded, for JSON output."""

        def roots(kind_dir: str) -> list[dict[str, str]]:
            return [
                {"path": root.path, "source_type": root.source_type.value}
                for root in self.search_roots(kind_dir)
            ]

        return {
            "version": self.version,
            "project_root": str(self.project_path()),
            "logging": {"level": self.logging.level},
            "skills": {"roots": roots("skills")},
            "agents": {"roots": roots("agents")},
        }
