"""
Exceptions raised by the capability resource engine.

Every exception carries the resource kind label ("skill", "agent") so
messages read naturally for each catalog, while callers branch on the
exception type rather than on message text.

Hierarchy:
- ResourceError
  - InvalidNameError (one subclass per grammar rule)
  - MissingFieldError, InvalidFieldError, FrontmatterError
  - InvalidResourceError
  - ResourceNotFoundError, SpecFileNotFoundError
  - AlreadyRegisteredError
  - ResourceLoadError
"""

from __future__ import annotations

import pathlib as _pathlib


class ResourceError(Exception):
    """Base class for all capability resource errors."""

    def __init__(self, message: str, *, kind: str = "resource") -> None:
        self.kind = kind
        super().__init__(message)


# =============================================================================
# Name grammar
# =============================================================================


class InvalidNameError(ResourceError):
    """Raised when a name violates the resource name grammar."""

    reason = "must contain only lowercase letters, numbers, and hyphens"

    def __init__(self, name: object, *, kind: str = "resource") -> None:
        self.name = name
        super().__init__(f"invalid {kind} name {name!r}: {self.reason}", kind=kind)


class NameEmptyError(InvalidNameError):
    """Raised for an empty name."""

    reason = "name cannot be empty"


class NameTooLongError(InvalidNameError):
    """Raised for a name longer than 64 characters."""

    reason = "name must be 64 characters or less"


class NameHyphenError(InvalidNameError):
    """Raised when a name starts or ends with a hyphen."""

    reason = "name cannot start or end with a hyphen"


class NameConsecutiveHyphenError(InvalidNameError):
    """Raised when a name contains two consecutive hyphens."""

    reason = "name cannot contain consecutive hyphens"


class NameInvalidCharacterError(InvalidNameError):
    """Raised when a name contains a character outside [a-z0-9-]."""


# =============================================================================
# Document and entity validation
# =============================================================================


class FrontmatterError(ResourceError):
    """Raised when a resource document has no usable YAML frontmatter."""


class MissingFieldError(ResourceError):
    """Raised when a required frontmatter field is missing or empty."""

    def __init__(self, field: str, *, kind: str = "resource") -> None:
        self.field = field
        super().__init__(f"{kind} {field} is required", kind=kind)


class InvalidFieldError(ResourceError):
    """Raised when a frontmatter field has a value the kind does not accept."""

    def __init__(self, field: str, detail: str, *, kind: str = "resource") -> None:
        self.field = field
        super().__init__(f"invalid {kind} {field}: {detail}", kind=kind)


class InvalidResourceError(ResourceError):
    """Raised when a resource object itself is unusable (e.g. None)."""


# =============================================================================
# Lookup and registration
# =============================================================================


class ResourceNotFoundError(ResourceError):
    """Raised when a name is unknown to the registry."""

    def __init__(self, name: str, *, kind: str = "resource") -> None:
        self.name = name
        super().__init__(f"{kind} not found: {name}", kind=kind)


class SpecFileNotFoundError(ResourceError):
    """Raised when a valid name has no spec file on disk."""

    def __init__(
        self,
        name: str,
        spec_filename: str,
        *,
        kind: str = "resource",
        path: _pathlib.Path | None = None,
    ) -> None:
        self.name = name
        self.path = path
        super().__init__(
            f"{spec_filename} file not found for {kind} '{name}'", kind=kind
        )


class AlreadyRegisteredError(ResourceError):
    """Raised when a programmatic resource name is already registered."""

    def __init__(self, name: str, *, kind: str = "resource") -> None:
        self.name = name
        super().__init__(f"{kind} is already registered: {name}", kind=kind)


class ResourceLoadError(ResourceError):
    """Raised when a spec file exists but cannot be read."""

    def __init__(
        self, name: str, path: _pathlib.Path, detail: str, *, kind: str = "resource"
    ) -> None:
        self.name = name
        self.path = path
        super().__init__(f"failed to read {path} for {kind} '{name}': {detail}", kind=kind)
