"""
Skill registry.

Skills are discovered from disk and then switched on and off by name.
Only activated skills are offered to the model as invokable.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib

import armory.config as config
import armory.resources.discovery as discovery
import armory.resources.registry as registry
import armory.skills.skill as skill_module

_logger = _logging.getLogger(__name__)

SKILLS_DIR = "skills"


class SkillRegistry(registry.ResourceRegistry):
    """
    Registry for managing skills.

    Handles:
    - Skill discovery from the project, project .claude and user roots
    - Progressive skill loading
    - Skill activation state
    """

    def __init__(
        self,
        roots: list[discovery.SearchRoot] | None = None,
        project_root: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the skill registry.

        Args:
            roots: Custom search roots, highest priority first (overrides
                the defaults).
            project_root: Project root for the default roots. Ignored when
                roots is given.
        """
        if roots is None:
            roots = discovery.default_search_roots(SKILLS_DIR, project_root)
        super().__init__(skill_module.Skill, roots)

    def activate(self, name: str) -> bool:
        """
        Mark a discovered skill as active.

        Activating an already active skill is a no-op that still succeeds.

        Returns:
            True once the skill is active.

        Raises:
            InvalidNameError: Name violates the name grammar.
            ResourceNotFoundError: No skill with that name was discovered.
        """
        return self._activate(name)

    def deactivate(self, name: str) -> bool:
        """
        Clear the active flag of a discovered skill.

        Returns:
            True once the skill is inactive.

        Raises:
            InvalidNameError: Name violates the name grammar.
            ResourceNotFoundError: No skill with that name was discovered.
        """
        return self._deactivate(name)

    def is_active(self, name: str) -> bool:
        """Check whether a skill is currently active."""
        return self._is_active(name)


def create_skill_registry(settings: config.Settings | None = None) -> SkillRegistry:
    """
    Build a skill registry from configuration.

    Args:
        settings: Settings to read search roots from. Loaded from the
            environment and config files when omitted.

    Returns:
        A SkillRegistry that has not run discovery yet.
    """
    if settings is None:
        settings = config.Settings()
    roots = settings.search_roots(SKILLS_DIR)
    _logger.debug("Skill search roots: %s", [root.path for root in roots])
    return SkillRegistry(roots)
