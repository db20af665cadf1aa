"""
Thread-safe registry shared by every resource kind.

The registry owns three pieces of state:

- the catalog: resources found on disk, keyed by name
- the active set: catalog names currently marked active
- the programmatic map: resources registered in memory, keyed by name

All three sit behind a single lock. Every public method holds it for its
whole duration, and query methods copy into ResourceInfo snapshots before
releasing it, so callers never see the internal maps.
"""

from __future__ import annotations

import logging as _logging
import threading as _threading

import armory.resources.discovery as discovery
import armory.resources.errors as errors
import armory.resources.loader as loader
import armory.resources.names as names
import armory.resources.resource as resource_module
import armory.resources.scanner as scanner

_logger = _logging.getLogger(__name__)


class ResourceRegistry:
    """
    Discovery, lazy loading and availability state for one resource kind.

    Kind registries (skills, subagents) subclass this and expose the
    `_activate`/`_deactivate` or `_register`/`_unregister` primitives under
    their own names.

    Locking is a plain mutex, not a reader/writer lock: concurrent queries
    serialize against each other as well as against discovery and toggles.
    Queries only copy into snapshots, so the lock is held briefly; a
    discover() call holds it for the whole scan.
    """

    def __init__(
        self,
        entity_class: type[resource_module.CapabilityResource],
        roots: list[discovery.SearchRoot],
    ) -> None:
        """
        Initialize the registry.

        Args:
            entity_class: Resource class of the kind (Skill, Subagent).
            roots: Search roots, highest priority first.
        """
        self._entity_class = entity_class
        self._roots = list(roots)
        self._lock = _threading.Lock()
        self._catalog: dict[str, resource_module.CapabilityResource] = {}
        self._active: set[str] = set()
        self._programmatic: dict[str, resource_module.CapabilityResource] = {}
        self._resolver = discovery.PriorityResolver(scanner.DirectoryScanner(entity_class))
        self._loader = loader.ProgressiveLoader(entity_class, self._roots)

    @property
    def kind(self) -> str:
        """Kind label used in messages ("skill", "agent")."""
        return self._entity_class.kind_label

    @property
    def roots(self) -> list[discovery.SearchRoot]:
        """Search roots in priority order."""
        return list(self._roots)

    # Discovery and loading
    def discover(self) -> resource_module.DiscoveryResult:
        """
        Rescan all search roots and rebuild the catalog.

        Active entries are carried over even if they are no longer on disk.
        Programmatic entries are never touched.
        """
        with self._lock:
            return self._resolver.resolve(self._roots, self._catalog, self._active)

    def load_full(self, name: str) -> resource_module.CapabilityResource:
        """
        Return the named resource with its body loaded.

        Programmatic entries are returned as registered. A cataloged entry
        is loaded in place, so the returned object is the cataloged one.

        Raises:
            InvalidNameError: Name violates the name grammar.
            SpecFileNotFoundError: No spec file exists for the name.
            ResourceLoadError: The spec file cannot be read.
            FrontmatterError: The spec file cannot be decoded.
            InvalidFieldError: The spec file declares another name or holds
                a value the kind rejects.
        """
        names.validate_name(name, self.kind)
        with self._lock:
            programmatic = self._programmatic.get(name)
            if programmatic is not None:
                return programmatic
            return self._loader.load(name, self._catalog)

    # Queries
    def get_by_name(self, name: str) -> resource_module.ResourceInfo:
        """
        Get a snapshot of one resource.

        Raises:
            ResourceNotFoundError: Name is neither registered nor cataloged.
        """
        with self._lock:
            programmatic = self._programmatic.get(name)
            if programmatic is not None:
                return programmatic.to_info(is_active=True)
            cataloged = self._catalog.get(name)
            if cataloged is not None:
                return cataloged.to_info(is_active=name in self._active)
        raise errors.ResourceNotFoundError(name, kind=self.kind)

    def list_all(self) -> list[resource_module.ResourceInfo]:
        """All cataloged and registered resources, sorted by name."""
        with self._lock:
            infos = {
                name: entry.to_info(is_active=name in self._active)
                for name, entry in self._catalog.items()
            }
            for name, entry in self._programmatic.items():
                infos[name] = entry.to_info(is_active=True)
        return [infos[name] for name in sorted(infos)]

    def list_active(self) -> list[resource_module.ResourceInfo]:
        """Active cataloged resources plus every registered one, sorted by name."""
        with self._lock:
            infos = {
                name: entry.to_info(is_active=True)
                for name, entry in self._catalog.items()
                if name in self._active
            }
            for name, entry in self._programmatic.items():
                infos[name] = entry.to_info(is_active=True)
        return [infos[name] for name in sorted(infos)]

    def validate_all(self) -> dict[str, errors.ResourceError]:
        """
        Validate every cataloged and registered resource.

        Returns:
            Mapping of name to the validation error for each failing
            resource. Empty when everything is valid.
        """
        failures: dict[str, errors.ResourceError] = {}
        with self._lock:
            entries = {**self._catalog, **self._programmatic}
            for name, entry in entries.items():
                try:
                    entry.validate()
                except errors.ResourceError as e:
                    failures[name] = e
        return failures

    # Availability primitives
    def _activate(self, name: str) -> bool:
        names.validate_name(name, self.kind)
        with self._lock:
            if name not in self._catalog:
                raise errors.ResourceNotFoundError(name, kind=self.kind)
            self._active.add(name)
        _logger.debug("Activated %s %s", self.kind, name)
        return True

    def _deactivate(self, name: str) -> bool:
        names.validate_name(name, self.kind)
        with self._lock:
            if name not in self._catalog:
                raise errors.ResourceNotFoundError(name, kind=self.kind)
            self._active.discard(name)
        _logger.debug("Deactivated %s %s", self.kind, name)
        return True

    def _is_active(self, name: str) -> bool:
        with self._lock:
            return name in self._active and name in self._catalog

    def _register(self, resource: resource_module.CapabilityResource | None) -> None:
        if resource is None:
            raise errors.InvalidResourceError(f"{self.kind} cannot be None", kind=self.kind)
        if not isinstance(resource, self._entity_class):
            raise errors.InvalidResourceError(
                f"expected {self._entity_class.__name__}, got {type(resource).__name__}",
                kind=self.kind,
            )
        resource.validate()
        with self._lock:
            if resource.name in self._programmatic:
                raise errors.AlreadyRegisteredError(resource.name, kind=self.kind)
            resource.source_type = resource_module.SourceType.PROGRAMMATIC
            self._programmatic[resource.name] = resource
        _logger.debug("Registered %s %s", self.kind, resource.name)

    def _unregister(self, name: str) -> None:
        with self._lock:
            if name not in self._programmatic:
                raise errors.ResourceNotFoundError(name, kind=self.kind)
            del self._programmatic[name]
        _logger.debug("Unregistered %s %s", self.kind, name)
