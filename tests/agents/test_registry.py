"""
Tests for the subagent registry.

Tests verify that:
- Discovered subagents are cataloged but not registered
- Registration validates, rejects duplicates and shadows discovered agents
- Unregistration requires a registered agent
"""

import pathlib as _pathlib

import pytest as _pytest

import armory.agents as agents
import armory.config as config
import armory.resources.discovery as discovery
import armory.resources.errors as errors
import armory.resources.resource as resource_module

SourceType = resource_module.SourceType


def _registry(tmp_path: _pathlib.Path) -> agents.SubagentRegistry:
    return agents.SubagentRegistry(
        discovery.default_search_roots("agents", tmp_path, home=tmp_path / "home")
    )


def _agent(name: str = "helper", **fields: object) -> agents.Subagent:
    fields.setdefault("description", "Helps out")
    return agents.Subagent.create(name=name, body="You help.", **fields)


class TestDiscovery:
    """Tests for subagent discovery."""

    def test_discovers_agent_md(self, tmp_path: _pathlib.Path, make_agent, make_skill) -> None:
        make_agent(tmp_path / "agents", "reviewer", extra="model: opus\n")
        make_skill(tmp_path / "agents", "not-an-agent")
        reg = _registry(tmp_path)

        result = reg.discover()

        assert result.names() == ["reviewer"]
        info = reg.get_by_name("reviewer")
        assert info.kind == "agent"
        assert info.extensions["model"] == "opus"
        assert not info.is_active
        assert reg.list_active() == []

    def test_project_claude_root(self, tmp_path: _pathlib.Path, make_agent) -> None:
        make_agent(tmp_path / ".claude" / "agents", "reviewer")
        reg = _registry(tmp_path)
        reg.discover()
        assert reg.get_by_name("reviewer").source_type == SourceType.PROJECT_CLAUDE

    def test_load_full_returns_system_prompt(self, tmp_path: _pathlib.Path, make_agent) -> None:
        make_agent(tmp_path / "agents", "reviewer", body="Review carefully.")
        reg = _registry(tmp_path)
        reg.discover()
        assert reg.load_full("reviewer").system_prompt == "Review carefully."

    def test_create_from_settings(self, tmp_path: _pathlib.Path, isolated_env) -> None:
        with isolated_env:
            settings = config.Settings.construct_without_dotenv()
            reg = agents.create_subagent_registry(settings)
        assert [root.path for root in reg.roots] == [
            str(tmp_path / "agents"),
            str(tmp_path / ".claude" / "agents"),
            str(tmp_path / "home" / ".claude" / "agents"),
        ]


class TestRegistration:
    """Tests for register and unregister."""

    def test_register(self, tmp_path: _pathlib.Path) -> None:
        reg = _registry(tmp_path)
        agent = _agent(source_type=SourceType.USER)

        reg.register(agent)

        assert agent.source_type == SourceType.PROGRAMMATIC
        info = reg.get_by_name("helper")
        assert info.is_active
        assert info.source_type == SourceType.PROGRAMMATIC
        assert [i.name for i in reg.list_active()] == ["helper"]
        assert reg.load_full("helper") is agent

    def test_register_none(self, tmp_path: _pathlib.Path) -> None:
        with _pytest.raises(errors.InvalidResourceError):
            _registry(tmp_path).register(None)

    def test_register_invalid(self, tmp_path: _pathlib.Path) -> None:
        reg = _registry(tmp_path)
        with _pytest.raises(errors.InvalidNameError):
            reg.register(_agent("Bad_Name"))
        with _pytest.raises(errors.InvalidFieldError):
            reg.register(_agent(model="gpt"))
        assert reg.list_all() == []

    def test_duplicate_registration(self, tmp_path: _pathlib.Path) -> None:
        reg = _registry(tmp_path)
        reg.register(_agent())
        with _pytest.raises(errors.AlreadyRegisteredError):
            reg.register(_agent())

    def test_programmatic_shadows_discovered(
        self, tmp_path: _pathlib.Path, make_agent
    ) -> None:
        make_agent(tmp_path / "agents", "helper", description="From disk")
        reg = _registry(tmp_path)
        reg.discover()

        reg.register(_agent(description="In memory"))

        assert reg.get_by_name("helper").description == "In memory"
        assert [info.description for info in reg.list_all()] == ["In memory"]

        reg.unregister("helper")
        assert reg.get_by_name("helper").description == "From disk"

    def test_discover_leaves_programmatic_alone(self, tmp_path: _pathlib.Path) -> None:
        reg = _registry(tmp_path)
        reg.register(_agent())
        reg.discover()
        assert [info.name for info in reg.list_all()] == ["helper"]

    def test_unregister_unknown(self, tmp_path: _pathlib.Path, make_agent) -> None:
        make_agent(tmp_path / "agents", "on-disk")
        reg = _registry(tmp_path)
        reg.discover()
        with _pytest.raises(errors.ResourceNotFoundError):
            reg.unregister("on-disk")
