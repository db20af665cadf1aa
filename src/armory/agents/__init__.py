"""
Subagents for Armory.

A subagent is a specialized agent defined by an AGENT.md file inside a
directory of the same name. The frontmatter selects the model, action
budget and extended-thinking settings; the body is the system prompt.

Subagent discovery locations (in priority order):
1. <project>/agents/ - Project agents
2. <project>/.claude/agents/ - Project agents in the .claude directory
3. ~/.claude/agents/ - User agents
"""

from armory.agents.registry import (
    AGENTS_DIR,
    SubagentRegistry,
    create_subagent_registry,
)
from armory.agents.subagent import (
    VALID_MODELS,
    Subagent,
    SubagentFrontmatter,
    SubagentModel,
)

__all__ = [
    # Core
    "Subagent",
    "SubagentFrontmatter",
    "SubagentModel",
    "VALID_MODELS",
    # Registry
    "AGENTS_DIR",
    "SubagentRegistry",
    "create_subagent_registry",
]
