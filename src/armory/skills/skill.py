"""
Skill definition.

A skill is a directory holding a SKILL.md file. The frontmatter carries
metadata; the body carries instructions that are loaded only when the
skill is used.
"""

from __future__ import annotations

import typing as _typing

import pydantic as _pydantic

import armory.resources.resource as resource_module

# Soft limit for SKILL.md body (lines) - matches Anthropic guidance
SKILL_BODY_SOFT_LIMIT = 500


class SkillFrontmatter(resource_module.ResourceFrontmatter):
    """
    Frontmatter parsed from a SKILL.md file.

    Required fields:
    - name: Skill identifier (must match directory name)
    - description: What the skill does AND when to use it

    Optional fields provide additional metadata.
    """

    license: str | None = _pydantic.Field(
        default=None,
        description="License for the skill",
    )

    compatibility: str | None = _pydantic.Field(
        default=None,
        description="Environment requirements (products, system packages, network)",
    )

    metadata: dict[str, _typing.Any] = _pydantic.Field(
        default_factory=dict,
        description="Custom metadata for client-specific data",
    )

    @_pydantic.field_validator("license", "compatibility", mode="before")
    @classmethod
    def _scalar_to_text(cls, value: _typing.Any) -> _typing.Any:
        # YAML reads "license: 2.0" as a float
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @_pydantic.field_validator("metadata", mode="before")
    @classmethod
    def _metadata_or_empty(cls, value: _typing.Any) -> _typing.Any:
        return {} if value is None else value


class Skill(resource_module.CapabilityResource):
    """
    A skill, possibly with its body not yet loaded.

    The body contains instructions that are injected when the skill is
    used; discovery leaves it empty.
    """

    kind_label: _typing.ClassVar[str] = "skill"
    spec_filename: _typing.ClassVar[str] = "SKILL.md"
    frontmatter_model: _typing.ClassVar[type[resource_module.ResourceFrontmatter]] = (
        SkillFrontmatter
    )
    body_soft_limit: _typing.ClassVar[int | None] = SKILL_BODY_SOFT_LIMIT

    frontmatter: SkillFrontmatter

    @property
    def license(self) -> str | None:
        """Skill license from frontmatter."""
        return self.frontmatter.license

    @property
    def compatibility(self) -> str | None:
        """Environment requirements from frontmatter."""
        return self.frontmatter.compatibility

    @property
    def metadata(self) -> dict[str, _typing.Any]:
        """Custom metadata from frontmatter."""
        return dict(self.frontmatter.metadata)

    @property
    def exceeds_soft_limit(self) -> bool:
        """Whether body exceeds the soft limit."""
        return self.body_line_count > SKILL_BODY_SOFT_LIMIT
