"""Configuration section models for Armory settings.

- KindConfig: search directories for one resource kind (skills, agents)
- LoggingConfig: log level

Every section keeps unknown keys (`extra="allow"`) so a config file can be
audited for typos with `collect_all_extra_fields()`.
"""

import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic


class ConfigBase(_pydantic.BaseModel):
    """Config section that remembers keys it does not define."""

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Unrecognized keys of this section (not nested ones)."""
        return dict(self.model_extra or {})

    def has_extra_fields(self) -> bool:
        return bool(self.model_extra)

    def collect_all_extra_fields(self, prefix: str = "") -> dict[str, _typing.Any]:
        """
        Unrecognized keys of this section and every nested section.

        Keys are dotted paths, e.g. {"skills.user_dri": "~/skills"}.
        """

        def dotted(key: str) -> str:
            return f"{prefix}.{key}" if prefix else key

        collected = {dotted(key): value for key, value in self.get_extra_fields().items()}
        for name in type(self).model_fields:
            section = getattr(self, name, None)
            if isinstance(section, ConfigBase):
                collected.update(section.collect_all_extra_fields(dotted(name)))
        return collected


# =============================================================================
# Resource search directories
# =============================================================================


class KindConfig(ConfigBase):
    """
    Search directories for one resource kind.

    YAML sections: skills.*, agents.*

    Relative project directories are resolved against the project root.
    """

    project_dir: str = "skills"
    """Project directory (highest priority)."""

    project_claude_dir: str = ".claude/skills"
    """Project .claude directory."""

    user_dir: str = "~/.claude/skills"
    """User directory (lowest priority). Tilde is expanded."""

    include_user: bool = True
    """Search the user directory at all."""

    def user_path(self) -> _pathlib.Path:
        """User directory with ~ expanded."""
        return _pathlib.Path(self.user_dir).expanduser()


# =============================================================================
# Logging Settings
# =============================================================================


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = "warning"
    """Log level for the CLI's root logger."""
