"""
Subagent definition.

A subagent is a directory holding an AGENT.md file. The frontmatter
configures the agent (model, action budget, extended thinking); the body
is its system prompt.
"""

from __future__ import annotations

import enum as _enum
import typing as _typing

import pydantic as _pydantic

import armory.resources.errors as errors
import armory.resources.resource as resource_module


class SubagentModel(str, _enum.Enum):
    """Models a subagent may request."""

    INHERIT = "inherit"
    """Use the parent agent's model."""

    HAIKU = "haiku"
    SONNET = "sonnet"
    OPUS = "opus"


VALID_MODELS = frozenset(model.value for model in SubagentModel)


def _is_int(value: _typing.Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class SubagentFrontmatter(resource_module.ResourceFrontmatter):
    """
    Frontmatter parsed from an AGENT.md file.

    Fields of the wrong YAML type decode to their "inherit" value instead
    of failing the whole file.
    """

    model: str = _pydantic.Field(
        default="",
        description="Model to use; empty means the caller decides",
    )

    max_actions: int = _pydantic.Field(
        default=0,
        description="Maximum actions per run (0 = unlimited/inherit)",
    )

    thinking_enabled: bool | None = _pydantic.Field(
        default=None,
        description="Extended thinking toggle (None = inherit from parent)",
    )

    thinking_budget: int = _pydantic.Field(
        default=0,
        description="Extended thinking token budget (0 = inherit)",
    )

    @_pydantic.field_validator("model", mode="before")
    @classmethod
    def _model_text(cls, value: _typing.Any) -> str:
        return value if isinstance(value, str) else ""

    @_pydantic.field_validator("max_actions", "thinking_budget", mode="before")
    @classmethod
    def _int_or_zero(cls, value: _typing.Any) -> int:
        return value if _is_int(value) else 0

    @_pydantic.field_validator("thinking_enabled", mode="before")
    @classmethod
    def _bool_or_inherit(cls, value: _typing.Any) -> bool | None:
        return value if isinstance(value, bool) else None


class Subagent(resource_module.CapabilityResource):
    """A subagent, possibly with its system prompt not yet loaded."""

    kind_label: _typing.ClassVar[str] = "agent"
    spec_filename: _typing.ClassVar[str] = "AGENT.md"
    frontmatter_model: _typing.ClassVar[type[resource_module.ResourceFrontmatter]] = (
        SubagentFrontmatter
    )

    frontmatter: SubagentFrontmatter

    @property
    def model(self) -> str:
        return self.frontmatter.model

    @property
    def max_actions(self) -> int:
        return self.frontmatter.max_actions

    @property
    def thinking_enabled(self) -> bool | None:
        return self.frontmatter.thinking_enabled

    @property
    def thinking_budget(self) -> int:
        return self.frontmatter.thinking_budget

    @property
    def system_prompt(self) -> str:
        """The loaded body; "" until loaded."""
        return self.body

    def _validate_extensions(self) -> None:
        if self.model and self.model not in VALID_MODELS:
            raise errors.InvalidFieldError(
                "model",
                "must be one of: inherit, haiku, sonnet, opus",
                kind=self.kind_label,
            )
        if self.max_actions < 0:
            raise errors.InvalidFieldError(
                "max_actions", "cannot be negative", kind=self.kind_label
            )
        if self.thinking_budget < 0:
            raise errors.InvalidFieldError(
                "thinking_budget", "cannot be negative", kind=self.kind_label
            )
