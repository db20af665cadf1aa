"""
YAML frontmatter codec for resource spec files.

A spec file looks like:

    ---
    name: my-skill
    description: What it does
    allowed-tools: bash read_file
    ---
    Instructions...

Two decode paths exist. `decode_metadata` is used by bulk discovery and
never keeps the body; `decode_full` is used on demand and keeps it.
"""

from __future__ import annotations

import typing as _typing

import pydantic as _pydantic
import yaml as _yaml

import armory.resources.errors as errors

if _typing.TYPE_CHECKING:
    import armory.resources.resource as resource_module

_DELIMITER = "---"

ResourceT = _typing.TypeVar("ResourceT", bound="resource_module.CapabilityResource")


def split_frontmatter(document: str, *, kind: str = "resource") -> tuple[str, str]:
    """
    Split a resource document into its frontmatter block and body.

    Args:
        document: Raw file content.
        kind: Resource kind label used in error messages.

    Returns:
        Tuple of (frontmatter, body), both stripped of surrounding whitespace.

    Raises:
        FrontmatterError: Opening or closing delimiter is missing.
    """
    content = document.strip()
    if not content.startswith(_DELIMITER):
        raise errors.FrontmatterError(
            "invalid YAML frontmatter: missing opening ---", kind=kind
        )

    closing = content.find("\n" + _DELIMITER, len(_DELIMITER))
    if closing == -1:
        raise errors.FrontmatterError(
            "invalid YAML frontmatter: missing closing ---", kind=kind
        )

    frontmatter = content[len(_DELIMITER) : closing].strip()

    # Body starts on the line after the closing delimiter
    after_delimiter = content[closing + 1 + len(_DELIMITER) :]
    newline = after_delimiter.find("\n")
    body = "" if newline == -1 else after_delimiter[newline + 1 :]

    return frontmatter, body.strip()


def normalize_tool_list(value: _typing.Any) -> list[str]:
    """
    Normalize an allowed-tools value to a list of tool names.

    A string is split on whitespace; a sequence keeps its string items in
    order. Any other shape yields an empty list instead of an error.
    """
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str)]
    return []


def _decode(
    entity_class: type[ResourceT],
    document: str,
    *,
    include_body: bool,
) -> ResourceT:
    kind = entity_class.kind_label
    frontmatter_text, body = split_frontmatter(document, kind=kind)

    try:
        data = _yaml.safe_load(frontmatter_text)
    except _yaml.YAMLError as e:
        raise errors.FrontmatterError(f"invalid YAML in frontmatter: {e}", kind=kind) from e

    if not isinstance(data, dict):
        raise errors.FrontmatterError("frontmatter must be a YAML mapping", kind=kind)

    try:
        parsed = entity_class.frontmatter_model.model_validate(
            {str(key): value for key, value in data.items()}
        )
    except _pydantic.ValidationError as e:
        raise errors.FrontmatterError(f"invalid {kind} frontmatter: {e}", kind=kind) from e

    if not parsed.name:
        raise errors.MissingFieldError("name", kind=kind)
    if not parsed.description:
        raise errors.MissingFieldError("description", kind=kind)

    return entity_class(
        frontmatter=parsed,
        raw_frontmatter=frontmatter_text,
        body=body if include_body else "",
    )


def decode_metadata(entity_class: type[ResourceT], document: str) -> ResourceT:
    """
    Decode frontmatter only (progressive disclosure, level 1).

    The body is never stored on the returned resource, even when the
    document has one.

    Raises:
        FrontmatterError: Delimiters, YAML or field types are invalid.
        MissingFieldError: name or description is missing or empty.
    """
    return _decode(entity_class, document, include_body=False)


def decode_full(entity_class: type[ResourceT], document: str) -> ResourceT:
    """
    Decode frontmatter and body (progressive disclosure, level 2).

    Raises:
        FrontmatterError: Delimiters, YAML or field types are invalid.
        MissingFieldError: name or description is missing or empty.
    """
    return _decode(entity_class, document, include_body=True)
