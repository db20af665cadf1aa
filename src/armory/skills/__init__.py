"""
Agent Skills for Armory.

Skills are modular capabilities defined by a SKILL.md file inside a
directory of the same name. They provide:
- Instructions that are loaded only when the skill is used
- Progressive disclosure (frontmatter first, body on demand)
- An activation state deciding which skills are currently invokable

Skill discovery locations (in priority order):
1. <project>/skills/ - Project skills
2. <project>/.claude/skills/ - Project skills in the .claude directory
3. ~/.claude/skills/ - User skills
"""

from armory.skills.registry import (
    SKILLS_DIR,
    SkillRegistry,
    create_skill_registry,
)
from armory.skills.skill import (
    SKILL_BODY_SOFT_LIMIT,
    Skill,
    SkillFrontmatter,
)

__all__ = [
    # Core
    "Skill",
    "SkillFrontmatter",
    "SKILL_BODY_SOFT_LIMIT",
    # Registry
    "SKILLS_DIR",
    "SkillRegistry",
    "create_skill_registry",
]
