"""
Shared pytest fixtures for Armory tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import os as _os
import pathlib as _pathlib
import typing as _typing
import unittest.mock as _mock

import click.testing as _click_testing
import pytest as _pytest

import armory.config as config

# Environment variable prefix that is cleared for isolated tests
ENV_PREFIX_TO_CLEAR = "ARMORY_"

ResourceWriter = _typing.Callable[..., _pathlib.Path]


def _write_resource(
    spec_filename: str,
    parent: _pathlib.Path,
    name: str,
    *,
    description: str = "Test resource",
    body: str = "Instructions.",
    extra: str = "",
    directory: str | None = None,
) -> _pathlib.Path:
    resource_dir = parent / (directory or name)
    resource_dir.mkdir(parents=True, exist_ok=True)
    frontmatter = f"name: {name}\ndescription: {description}\n{extra}"
    (resource_dir / spec_filename).write_text(f"---\n{frontmatter}---\n\n{body}\n")
    return resource_dir


@_pytest.fixture
def make_skill() -> ResourceWriter:
    """
    Factory creating a skill directory with a SKILL.md file.

    Usage:
        make_skill(root, "my-skill", description="...", body="...",
                   extra="license: MIT\\n", directory="other-name")
    """

    def _make(parent: _pathlib.Path, name: str, **kwargs: _typing.Any) -> _pathlib.Path:
        return _write_resource("SKILL.md", parent, name, **kwargs)

    return _make


@_pytest.fixture
def make_agent() -> ResourceWriter:
    """Factory creating a subagent directory with an AGENT.md file."""

    def _make(parent: _pathlib.Path, name: str, **kwargs: _typing.Any) -> _pathlib.Path:
        return _write_resource("AGENT.md", parent, name, **kwargs)

    return _make


@_pytest.fixture
def clean_env() -> dict[str, str]:
    """
    Return environment dict with ARMORY_* keys removed.

    Use with mock.patch.dict to isolate tests from the actual environment.
    """
    return {k: v for k, v in _os.environ.items() if not k.startswith(ENV_PREFIX_TO_CLEAR)}


@_pytest.fixture
def isolated_env(clean_env: dict[str, str], tmp_path: _pathlib.Path):
    """
    Context manager that isolates tests from environment variables.

    The user config directory points at an empty temporary directory and
    the project root and HOME at tmp_path, so no real config file or user
    resource directory is read.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    env = dict(clean_env)
    env["ARMORY_CONFIG_DIR"] = str(tmp_path / "user-config")
    env["ARMORY_PROJECT_ROOT"] = str(tmp_path)
    env["HOME"] = str(tmp_path / "home")
    return _mock.patch.dict(_os.environ, env, clear=True)


@_pytest.fixture
def clean_settings(isolated_env) -> config.Settings:
    """
    Settings instance isolated from environment and .env file.

    This fixture ensures tests get predictable default settings.
    """
    with isolated_env:
        yield config.Settings.construct_without_dotenv()


@_pytest.fixture
def cli_runner() -> _click_testing.CliRunner:
    """CLI runner for end-to-end tests."""
    return _click_testing.CliRunner()
