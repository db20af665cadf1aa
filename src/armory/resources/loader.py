"""
On-demand body loading (progressive disclosure, level 2).

Discovery only keeps frontmatter. When a resource is actually used, the
loader re-reads its spec file and merges the body into the cataloged
object. The object is mutated in place, never replaced, so anything
holding a reference to it sees the loaded body.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib

import armory.resources.discovery as discovery
import armory.resources.errors as errors
import armory.resources.frontmatter as frontmatter
import armory.resources.resource as resource_module

_logger = _logging.getLogger(__name__)


class ProgressiveLoader:
    """
    Loads full resource content by name.

    The loader does no locking of its own. The registry calls `load` with
    its lock held and only after the name has passed validation.
    """

    def __init__(
        self,
        entity_class: type[resource_module.CapabilityResource],
        roots: list[discovery.SearchRoot],
    ) -> None:
        self._entity_class = entity_class
        self._roots = roots

    def find_spec_file(
        self, name: str
    ) -> tuple[_pathlib.Path, discovery.SearchRoot] | None:
        """
        Search the roots, in priority order, for <root>/<name>/<spec file>.

        Args:
            name: A name that has already passed validation.

        Returns:
            (spec file path, root) for the first match, or None.
        """
        for root in self._roots:
            candidate = _pathlib.Path(root.path) / name / self._entity_class.spec_filename
            if candidate.is_file():
                return candidate, root
        return None

    def load(
        self,
        name: str,
        catalog: dict[str, resource_module.CapabilityResource],
    ) -> resource_module.CapabilityResource:
        """
        Return the resource with its body loaded.

        A cataloged entry that already has a body is returned as is. A
        cataloged entry without one gets its body and raw frontmatter
        filled in from its recorded directory. A name that is not
        cataloged is looked up across the roots and returned without
        being added to the catalog.

        Raises:
            SpecFileNotFoundError: No spec file exists for the name.
            ResourceLoadError: The spec file exists but cannot be read.
            FrontmatterError: The spec file cannot be decoded.
            MissingFieldError: A required field is missing.
            InvalidFieldError: The file declares a different name, or a
                field fails the kind's validation.
            InvalidNameError: The declared name violates the name grammar.
        """
        kind = self._entity_class.kind_label
        spec_filename = self._entity_class.spec_filename

        existing = catalog.get(name)
        if existing is not None and existing.is_loaded:
            return existing

        root: discovery.SearchRoot | None = None
        if existing is not None and existing.directory_path:
            spec_file = _pathlib.Path(existing.directory_path) / spec_filename
        else:
            located = self.find_spec_file(name)
            if located is None:
                raise errors.SpecFileNotFoundError(name, spec_filename, kind=kind)
            spec_file, root = located

        try:
            document = spec_file.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise errors.SpecFileNotFoundError(
                name, spec_filename, kind=kind, path=spec_file
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise errors.ResourceLoadError(name, spec_file, str(e), kind=kind) from e

        loaded = frontmatter.decode_full(self._entity_class, document)
        if loaded.name != name:
            raise errors.InvalidFieldError(
                "name",
                f"'{loaded.name}' in {spec_file} does not match requested name '{name}'",
                kind=kind,
            )
        loaded.validate()
        self._warn_if_oversized(loaded)

        if existing is not None:
            existing.body = loaded.body
            existing.raw_frontmatter = loaded.raw_frontmatter
            return existing

        if root is not None:
            loaded.directory_path = str(spec_file.parent)
            loaded.absolute_path = str(spec_file.parent.absolute())
            loaded.source_type = root.source_type
        return loaded

    def _warn_if_oversized(self, loaded: resource_module.CapabilityResource) -> None:
        limit = loaded.body_soft_limit
        if limit is None:
            return
        line_count = loaded.body_line_count
        if line_count > limit:
            _logger.warning(
                "%s %s exceeds recommended body limit (%d lines > %d)",
                loaded.kind_label.capitalize(),
                loaded.name,
                line_count,
                limit,
            )
