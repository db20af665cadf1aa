"""
Resource name validation.

Names follow the agent-skills grammar: 1-64 characters drawn from
lowercase letters, digits and hyphens, with no leading, trailing or
consecutive hyphens. Every name supplied from outside is checked here
before it is joined onto a search root, so `..`, separators, drive
letters and NUL bytes never reach the filesystem.
"""

from __future__ import annotations

import armory.resources.errors as errors

MAX_NAME_LENGTH = 64

_ALLOWED_CHARACTERS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-")


def validate_name(name: object, kind: str = "resource") -> None:
    """
    Validate a resource name.

    Args:
        name: Candidate name.
        kind: Resource kind label used in error messages.

    Raises:
        NameEmptyError: Name is empty.
        NameTooLongError: Name is longer than MAX_NAME_LENGTH.
        NameHyphenError: Name starts or ends with a hyphen.
        NameConsecutiveHyphenError: Name contains "--".
        NameInvalidCharacterError: Name contains anything outside [a-z0-9-],
            or is not a string at all.
    """
    if not isinstance(name, str):
        raise errors.NameInvalidCharacterError(name, kind=kind)
    if not name:
        raise errors.NameEmptyError(name, kind=kind)
    if len(name) > MAX_NAME_LENGTH:
        raise errors.NameTooLongError(name, kind=kind)
    if name[0] == "-" or name[-1] == "-":
        raise errors.NameHyphenError(name, kind=kind)

    previous = ""
    for char in name:
        if char == "-" and previous == "-":
            raise errors.NameConsecutiveHyphenError(name, kind=kind)
        if char not in _ALLOWED_CHARACTERS:
            raise errors.NameInvalidCharacterError(name, kind=kind)
        previous = char


def is_valid_name(name: object) -> bool:
    """Check a name against the grammar without raising."""
    try:
        validate_name(name)
    except errors.InvalidNameError:
        return False
    return True
