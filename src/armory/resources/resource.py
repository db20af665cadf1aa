"""
Capability resource entity and its read-only views.

A capability resource is a directory holding a spec file (SKILL.md,
AGENT.md) whose YAML frontmatter carries metadata and whose body carries
instructions. The entity is shared by both kinds; each kind subclasses
it with its own frontmatter model and spec filename.

The body is loaded lazily: an empty string means "not loaded yet". Once
loaded it is never cleared, and the registry always mutates the cataloged
object in place so outstanding references see the update.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import typing as _typing

import pydantic as _pydantic

import armory.resources.errors as errors
import armory.resources.frontmatter as frontmatter_codec
import armory.resources.names as names

# Frontmatter fields shared by every kind; everything else is an extension.
CORE_FIELDS = frozenset({"name", "description", "allowed_tools"})

MAX_DESCRIPTION_LENGTH = 1024


class SourceType(str, _enum.Enum):
    """Where a resource came from."""

    PROJECT = "project"
    """<project>/skills or <project>/agents (highest priority)."""

    PROJECT_CLAUDE = "project-claude"
    """<project>/.claude/skills or <project>/.claude/agents."""

    USER = "user"
    """~/.claude/skills or ~/.claude/agents (lowest priority)."""

    PROGRAMMATIC = "programmatic"
    """Registered in memory, not file-backed."""


class ResourceFrontmatter(_pydantic.BaseModel):
    """
    Frontmatter fields common to all resource kinds.

    Unknown keys are preserved (extra="allow") and surface as extension
    fields. Non-string name/description values decode to "" so that the
    required-field check reports them as missing.
    """

    model_config = _pydantic.ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
    )

    name: str = ""
    description: str = ""
    allowed_tools: list[str] = _pydantic.Field(
        default_factory=list,
        alias="allowed-tools",
        description="Tools pre-approved for use with this resource",
    )

    @_pydantic.field_validator("name", "description", mode="before")
    @classmethod
    def _text_or_empty(cls, value: _typing.Any) -> str:
        return value if isinstance(value, str) else ""

    @_pydantic.field_validator("allowed_tools", mode="before")
    @classmethod
    def _normalize_tools(cls, value: _typing.Any) -> list[str]:
        return frontmatter_codec.normalize_tool_list(value)


@_dataclasses.dataclass(frozen=True)
class ResourceInfo:
    """Immutable snapshot of a resource, safe to hand to any caller."""

    name: str
    description: str
    allowed_tools: tuple[str, ...]
    source_type: SourceType
    directory_path: str
    is_active: bool
    kind: str
    extensions: dict[str, _typing.Any] = _dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "kind": self.kind,
            "allowed_tools": list(self.allowed_tools),
            "source_type": self.source_type.value,
            "directory_path": self.directory_path,
            "is_active": self.is_active,
            **self.extensions,
        }


@_dataclasses.dataclass
class DiscoveryResult:
    """Outcome of one discovery pass over all search roots."""

    resources: list[ResourceInfo]
    roots_searched: list[str]
    total_count: int
    active_count: int = 0

    def names(self) -> list[str]:
        """Names of the discovered resources, in discovery order."""
        return [info.name for info in self.resources]

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "roots_searched": list(self.roots_searched),
            "total_count": self.total_count,
            "active_count": self.active_count,
            "resources": [info.to_dict() for info in self.resources],
        }


@_dataclasses.dataclass(eq=False)
class CapabilityResource:
    """
    A skill or subagent, possibly with its body not yet loaded.

    Instances compare by identity: two objects with the same name are
    different catalog entries unless they are the same object.
    """

    kind_label: _typing.ClassVar[str] = "resource"
    spec_filename: _typing.ClassVar[str] = ""
    frontmatter_model: _typing.ClassVar[type[ResourceFrontmatter]] = ResourceFrontmatter
    body_soft_limit: _typing.ClassVar[int | None] = None

    frontmatter: ResourceFrontmatter
    """Parsed frontmatter metadata."""

    source_type: SourceType = SourceType.PROGRAMMATIC
    """Which search root produced this resource."""

    directory_path: str = ""
    """Resource directory as found under its search root; "" if programmatic."""

    absolute_path: str = ""
    """Resolved absolute resource directory; "" if programmatic."""

    raw_frontmatter: str = ""
    """Verbatim YAML frontmatter block."""

    body: str = ""
    """Markdown body after the frontmatter; "" until loaded."""

    @classmethod
    def create(
        cls,
        *,
        body: str = "",
        source_type: SourceType = SourceType.PROGRAMMATIC,
        **fields: _typing.Any,
    ) -> _typing.Self:
        """
        Build a resource in memory from frontmatter field values.

        Field names may use either the YAML spelling ("allowed-tools") or
        the attribute spelling ("allowed_tools").
        """
        return cls(
            frontmatter=cls.frontmatter_model.model_validate(fields),
            source_type=source_type,
            body=body,
        )

    @property
    def name(self) -> str:
        """Resource name from frontmatter."""
        return self.frontmatter.name

    @property
    def description(self) -> str:
        """Resource description from frontmatter."""
        return self.frontmatter.description

    @property
    def allowed_tools(self) -> list[str]:
        """Pre-approved tools from frontmatter."""
        return list(self.frontmatter.allowed_tools)

    @property
    def extensions(self) -> dict[str, _typing.Any]:
        """Kind-specific and unknown frontmatter fields."""
        return {
            key: value
            for key, value in self.frontmatter.model_dump().items()
            if key not in CORE_FIELDS
        }

    @property
    def is_loaded(self) -> bool:
        """Whether the body has been loaded."""
        return self.body != ""

    @property
    def body_line_count(self) -> int:
        """Number of lines in the loaded body."""
        return len(self.body.splitlines())

    def validate(self) -> None:
        """
        Check the entity against the rules for its kind.

        Raises:
            InvalidNameError: Name violates the name grammar.
            MissingFieldError: Description is empty.
            InvalidFieldError: A field has an unacceptable value.
        """
        names.validate_name(self.name, self.kind_label)
        if not self.description:
            raise errors.MissingFieldError("description", kind=self.kind_label)
        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise errors.InvalidFieldError(
                "description",
                f"must be {MAX_DESCRIPTION_LENGTH} characters or less",
                kind=self.kind_label,
            )
        self._validate_extensions()

    def _validate_extensions(self) -> None:
        """Kind-specific validation hook."""

    def refresh_metadata(self, other: CapabilityResource) -> None:
        """
        Take over the metadata of a freshly scanned copy of this resource.

        The body is left alone: a loaded body is never cleared.
        """
        if other.name != self.name:
            raise errors.InvalidResourceError(
                f"cannot refresh {self.kind_label} '{self.name}' from '{other.name}'",
                kind=self.kind_label,
            )
        self.frontmatter = other.frontmatter
        self.raw_frontmatter = other.raw_frontmatter
        self.source_type = other.source_type
        self.directory_path = other.directory_path
        self.absolute_path = other.absolute_path

    def to_info(self, *, is_active: bool) -> ResourceInfo:
        """Snapshot this resource for callers outside the registry."""
        return ResourceInfo(
            name=self.name,
            description=self.description,
            allowed_tools=tuple(self.frontmatter.allowed_tools),
            source_type=self.source_type,
            directory_path=self.directory_path,
            is_active=is_active,
            kind=self.kind_label,
            extensions=self.extensions,
        )
