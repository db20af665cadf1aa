"""
Priority-ordered discovery across several search roots.

Roots are searched in the order given, highest priority first. The first
root to provide a name wins; copies of that name in later roots are
ignored. The default order for each kind is:

1. <project>/skills (or agents)            - project
2. <project>/.claude/skills (or agents)    - project-claude
3. ~/.claude/skills (or agents)            - user
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib

import armory.resources.resource as resource_module
import armory.resources.scanner as scanner_module

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True)
class SearchRoot:
    """A directory to search, tagged with the source type it confers."""

    path: str
    source_type: resource_module.SourceType


def _home_directory() -> _pathlib.Path | None:
    try:
        return _pathlib.Path.home()
    except RuntimeError:
        return None


def default_search_roots(
    kind_dir: str,
    project_root: _pathlib.Path | str | None = None,
    home: _pathlib.Path | str | None = None,
) -> list[SearchRoot]:
    """
    Build the standard search roots for a kind, highest priority first.

    Args:
        kind_dir: Directory name for the kind ("skills" or "agents").
        project_root: Project directory. Defaults to the relative path ".".
        home: Home directory. Defaults to the current user's home; the user
            root is left out when no home directory can be determined.

    Returns:
        List of SearchRoot in priority order.
    """
    project = _pathlib.Path(project_root) if project_root is not None else _pathlib.Path(".")
    roots = [
        SearchRoot(str(project / kind_dir), resource_module.SourceType.PROJECT),
        SearchRoot(
            str(project / ".claude" / kind_dir), resource_module.SourceType.PROJECT_CLAUDE
        ),
    ]

    home_path = _pathlib.Path(home) if home is not None else _home_directory()
    if home_path is not None:
        roots.append(
            SearchRoot(
                str(home_path / ".claude" / kind_dir), resource_module.SourceType.USER
            )
        )
    return roots


class PriorityResolver:
    """Rebuilds a catalog from disk, honoring root priority."""

    def __init__(self, scanner: scanner_module.DirectoryScanner) -> None:
        self._scanner = scanner

    def resolve(
        self,
        roots: list[SearchRoot],
        catalog: dict[str, resource_module.CapabilityResource],
        active_names: set[str],
    ) -> resource_module.DiscoveryResult:
        """
        Recompute the catalog from the given roots.

        Entries whose names are active are carried over before scanning so
        a rescan never silently drops something in use, even when its file
        has moved or vanished. Every other entry is rebuilt from disk.

        Args:
            roots: Search roots, highest priority first.
            catalog: Catalog to rebuild in place.
            active_names: Names currently marked active.

        Returns:
            DiscoveryResult listing every root searched, existing or not.
        """
        carried = {name: entry for name, entry in catalog.items() if name in active_names}
        catalog.clear()
        catalog.update(carried)

        seen: set[str] = set()
        roots_searched: list[str] = []
        found: list[resource_module.CapabilityResource] = []

        for root in roots:
            roots_searched.append(root.path)
            found.extend(self._scanner.scan(root, seen, catalog))

        infos = [entry.to_info(is_active=entry.name in active_names) for entry in found]
        active_count = sum(1 for info in infos if info.is_active)

        _logger.debug(
            "Discovered %d %s resource(s) from %d root(s), %d carried over as active",
            len(infos),
            self._scanner.spec_filename,
            len(roots_searched),
            len(carried),
        )

        return resource_module.DiscoveryResult(
            resources=infos,
            roots_searched=roots_searched,
            total_count=len(infos),
            active_count=active_count,
        )
