"""
Tests for the skill registry.

Tests verify that:
- Skills are discovered from the project, project .claude and user roots
- Activation requires a discovered skill and is idempotent
- Active skills survive rediscovery; inactive ones do not
"""

import pathlib as _pathlib

import pytest as _pytest

import armory.config as config
import armory.resources.discovery as discovery
import armory.resources.errors as errors
import armory.resources.resource as resource_module
import armory.skills as skills

SourceType = resource_module.SourceType


def _registry(tmp_path: _pathlib.Path) -> skills.SkillRegistry:
    return skills.SkillRegistry(
        discovery.default_search_roots("skills", tmp_path, home=tmp_path / "home")
    )


class TestSkillRegistryRoots:
    """Tests for default and configured roots."""

    def test_default_roots(self, tmp_path: _pathlib.Path) -> None:
        reg = skills.SkillRegistry(project_root=tmp_path)
        paths = [root.path for root in reg.roots]
        assert paths[0] == str(tmp_path / "skills")
        assert paths[1] == str(tmp_path / ".claude" / "skills")
        assert reg.roots[-1].source_type == SourceType.USER

    def test_create_from_settings(self, tmp_path: _pathlib.Path, isolated_env) -> None:
        with isolated_env:
            settings = config.Settings.construct_without_dotenv()
            reg = skills.create_skill_registry(settings)
        assert [root.path for root in reg.roots] == [
            str(tmp_path / "skills"),
            str(tmp_path / ".claude" / "skills"),
            str(tmp_path / "home" / ".claude" / "skills"),
        ]


class TestActivation:
    """Tests for activate, deactivate and is_active."""

    def test_lifecycle(self, tmp_path: _pathlib.Path, make_skill) -> None:
        make_skill(tmp_path / "skills", "alpha")
        reg = _registry(tmp_path)
        reg.discover()

        assert reg.list_active() == []
        assert reg.activate("alpha") is True
        assert reg.activate("alpha") is True
        assert reg.is_active("alpha")
        assert [info.name for info in reg.list_active()] == ["alpha"]
        assert reg.get_by_name("alpha").is_active

        assert reg.deactivate("alpha") is True
        assert not reg.is_active("alpha")
        assert reg.list_active() == []

    def test_activate_unknown(self, tmp_path: _pathlib.Path) -> None:
        reg = _registry(tmp_path)
        reg.discover()
        with _pytest.raises(errors.ResourceNotFoundError):
            reg.activate("missing")

    def test_deactivate_unknown(self, tmp_path: _pathlib.Path) -> None:
        with _pytest.raises(errors.ResourceNotFoundError):
            _registry(tmp_path).deactivate("missing")

    def test_deactivate_inactive_known_skill(
        self, tmp_path: _pathlib.Path, make_skill
    ) -> None:
        make_skill(tmp_path / "skills", "alpha")
        reg = _registry(tmp_path)
        reg.discover()
        assert reg.deactivate("alpha") is True

    @_pytest.mark.parametrize("name", ["../alpha", "Alpha", "", "a--b"])
    def test_invalid_names(self, tmp_path: _pathlib.Path, name: str) -> None:
        reg = _registry(tmp_path)
        with _pytest.raises(errors.InvalidNameError):
            reg.activate(name)
        with _pytest.raises(errors.InvalidNameError):
            reg.deactivate(name)


class TestRediscovery:
    """Active skills are carried over across discover()."""

    def test_active_skill_survives_deletion(
        self, tmp_path: _pathlib.Path, make_skill
    ) -> None:
        active_dir = make_skill(tmp_path / "skills", "active-one")
        idle_dir = make_skill(tmp_path / "skills", "idle-one")
        reg = _registry(tmp_path)
        reg.discover()
        reg.activate("active-one")

        (active_dir / "SKILL.md").unlink()
        (idle_dir / "SKILL.md").unlink()
        result = reg.discover()

        assert result.total_count == 0
        assert [info.name for info in reg.list_all()] == ["active-one"]
        with _pytest.raises(errors.ResourceNotFoundError):
            reg.get_by_name("idle-one")

    def test_loaded_body_survives_rediscovery(
        self, tmp_path: _pathlib.Path, make_skill
    ) -> None:
        make_skill(tmp_path / "skills", "alpha", body="Original body.")
        reg = _registry(tmp_path)
        reg.discover()
        reg.activate("alpha")
        loaded = reg.load_full("alpha")

        make_skill(tmp_path / "skills", "alpha", description="Updated", body="New body.")
        reg.discover()

        again = reg.load_full("alpha")
        assert again is loaded
        assert again.body == "Original body."
        assert reg.get_by_name("alpha").description == "Updated"
