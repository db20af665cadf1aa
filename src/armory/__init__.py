"""
Armory - skill and subagent discovery.

Discovers capability resources (skills in SKILL.md, subagents in
AGENT.md) across prioritized search roots, loads their bodies on demand,
and tracks which of them are currently available.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("armory")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from armory.config import Settings  # noqa: E402
from armory.agents import Subagent, SubagentRegistry  # noqa: E402
from armory.skills import Skill, SkillRegistry  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "Settings",
    "Skill",
    "SkillRegistry",
    "Subagent",
    "SubagentRegistry",
]
