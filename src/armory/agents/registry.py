"""
Subagent registry.

Subagents found on disk are cataloged but not invokable. A subagent
becomes invokable once it is registered in memory; a registered agent
shadows a discovered one with the same name.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib

import armory.agents.subagent as subagent_module
import armory.config as config
import armory.resources.discovery as discovery
import armory.resources.registry as registry

_logger = _logging.getLogger(__name__)

AGENTS_DIR = "agents"


class SubagentRegistry(registry.ResourceRegistry):
    """Registry for discovered and programmatically registered subagents."""

    def __init__(
        self,
        roots: list[discovery.SearchRoot] | None = None,
        project_root: _pathlib.Path | None = None,
    ) -> None:
        if roots is None:
            roots = discovery.default_search_roots(AGENTS_DIR, project_root)
        super().__init__(subagent_module.Subagent, roots)

    def register(self, agent: subagent_module.Subagent | None) -> None:
        """
        Make a subagent available for use.

        The agent's source type is set to programmatic.

        Raises:
            InvalidResourceError: agent is None or not a Subagent.
            InvalidNameError: Name violates the name grammar.
            MissingFieldError: Description is empty.
            InvalidFieldError: A field has an unacceptable value.
            AlreadyRegisteredError: A subagent with that name is registered.
        """
        self._register(agent)

    def unregister(self, name: str) -> None:
        """
        Remove a registered subagent.

        Raises:
            ResourceNotFoundError: No subagent with that name is registered.
        """
        self._unregister(name)


def create_subagent_registry(
    settings: config.Settings | None = None,
) -> SubagentRegistry:
    """
    Build a subagent registry from configuration.

    Args:
        settings: Settings to read search roots from. Loaded from the
            environment and config files when omitted.

    Returns:
        A SubagentRegistry that has not run discovery yet.
    """
    if settings is None:
        settings = config.Settings()
    roots = settings.search_roots(AGENTS_DIR)
    _logger.debug("Agent search roots: %s", [root.path for root in roots])
    return SubagentRegistry(roots)
