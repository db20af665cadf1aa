"""
Scan one search root for resource spec files.

The scanner reads metadata only. Any file that cannot be read, decoded
or validated is skipped with a debug log entry; one bad resource never
stops the rest of the root from being discovered.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import armory.resources.errors as errors
import armory.resources.frontmatter as frontmatter
import armory.resources.resource as resource_module

if _typing.TYPE_CHECKING:
    import armory.resources.discovery as discovery

_logger = _logging.getLogger(__name__)


class DirectoryScanner:
    """Finds and decodes spec files of one resource kind under a root."""

    def __init__(self, entity_class: type[resource_module.CapabilityResource]) -> None:
        self._entity_class = entity_class

    @property
    def spec_filename(self) -> str:
        """Spec filename this scanner looks for (SKILL.md, AGENT.md)."""
        return self._entity_class.spec_filename

    def scan(
        self,
        root: discovery.SearchRoot,
        seen: set[str],
        catalog: dict[str, resource_module.CapabilityResource],
    ) -> list[resource_module.CapabilityResource]:
        """
        Scan a root and add its resources to the catalog.

        Args:
            root: Search root to walk.
            seen: Names already claimed by higher-priority roots. Updated
                with every name this root contributes.
            catalog: Shared name -> resource map. New names are inserted;
                a name already cataloged (a carried-over active resource)
                is refreshed in place.

        Returns:
            Resources contributed by this root, in walk order.
        """
        root_path = _pathlib.Path(root.path)
        if not root_path.is_dir():
            _logger.debug("Search root %s does not exist, skipping", root_path)
            return []

        found: list[resource_module.CapabilityResource] = []
        for spec_file in sorted(root_path.rglob(self.spec_filename)):
            if not spec_file.is_file():
                continue
            scanned = self._process(spec_file, root.source_type, seen, catalog)
            if scanned is not None:
                found.append(scanned)
        return found

    def _process(
        self,
        spec_file: _pathlib.Path,
        source_type: resource_module.SourceType,
        seen: set[str],
        catalog: dict[str, resource_module.CapabilityResource],
    ) -> resource_module.CapabilityResource | None:
        try:
            document = spec_file.read_text(encoding="utf-8")
            scanned = frontmatter.decode_metadata(self._entity_class, document)
            scanned.validate()
        except (OSError, UnicodeDecodeError, errors.ResourceError) as e:
            _logger.debug("Skipping %s: %s", spec_file, e)
            return None

        directory = spec_file.parent
        if directory.name != scanned.name:
            _logger.debug(
                "Skipping %s: directory name '%s' does not match %s name '%s'",
                spec_file,
                directory.name,
                scanned.kind_label,
                scanned.name,
            )
            return None

        if scanned.name in seen:
            _logger.debug(
                "Skipping %s: %s '%s' already provided by a higher-priority root",
                spec_file,
                scanned.kind_label,
                scanned.name,
            )
            return None
        seen.add(scanned.name)

        scanned.directory_path = str(directory)
        scanned.absolute_path = str(directory.absolute())
        scanned.source_type = source_type

        existing = catalog.get(scanned.name)
        if existing is not None:
            existing.refresh_metadata(scanned)
            return existing

        catalog[scanned.name] = scanned
        return scanned
