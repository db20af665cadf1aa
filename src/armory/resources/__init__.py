"""
Capability resource engine.

Discovers directory-based resources (skills, subagents) across several
search roots, resolves name collisions by root priority, loads bodies on
demand, and tracks which resources are currently available.

Progressive disclosure:
- Level 1: frontmatter only, read for every resource at discovery
- Level 2: full body, read when a resource is used (load_full)
"""

from armory.resources.discovery import (
    PriorityResolver,
    SearchRoot,
    default_search_roots,
)
from armory.resources.errors import (
    AlreadyRegisteredError,
    FrontmatterError,
    InvalidFieldError,
    InvalidNameError,
    InvalidResourceError,
    MissingFieldError,
    NameConsecutiveHyphenError,
    NameEmptyError,
    NameHyphenError,
    NameInvalidCharacterError,
    NameTooLongError,
    ResourceError,
    ResourceLoadError,
    ResourceNotFoundError,
    SpecFileNotFoundError,
)
from armory.resources.frontmatter import (
    decode_full,
    decode_metadata,
    normalize_tool_list,
    split_frontmatter,
)
from armory.resources.loader import ProgressiveLoader
from armory.resources.names import MAX_NAME_LENGTH, is_valid_name, validate_name
from armory.resources.registry import ResourceRegistry
from armory.resources.resource import (
    CapabilityResource,
    DiscoveryResult,
    ResourceFrontmatter,
    ResourceInfo,
    SourceType,
)
from armory.resources.scanner import DirectoryScanner

__all__ = [
    # Entities
    "CapabilityResource",
    "DiscoveryResult",
    "ResourceFrontmatter",
    "ResourceInfo",
    "SourceType",
    # Engine
    "DirectoryScanner",
    "PriorityResolver",
    "ProgressiveLoader",
    "ResourceRegistry",
    "SearchRoot",
    "default_search_roots",
    # Codec and names
    "MAX_NAME_LENGTH",
    "decode_full",
    "decode_metadata",
    "is_valid_name",
    "normalize_tool_list",
    "split_frontmatter",
    "validate_name",
    # Errors
    "AlreadyRegisteredError",
    "FrontmatterError",
    "InvalidFieldError",
    "InvalidNameError",
    "InvalidResourceError",
    "MissingFieldError",
    "NameConsecutiveHyphenError",
    "NameEmptyError",
    "NameHyphenError",
    "NameInvalidCharacterError",
    "NameTooLongError",
    "ResourceError",
    "ResourceLoadError",
    "ResourceNotFoundError",
    "SpecFileNotFoundError",
]
