"""
Main CLI entry point for Armory.

Provides a small diagnostic command-line interface using Click: it shows
which search roots are in effect, what discovery finds in them, and the
effective configuration.
"""

import json as _json
import logging as _logging
import pathlib as _pathlib
import sys as _sys
import typing as _typing

import click as _click
import yaml as _yaml

import armory
import armory.agents as agents
import armory.config as config
import armory.resources as resources
import armory.skills as skills

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(level: str, verbose: bool) -> None:
    """Configure the root logger for CLI runs."""
    effective = "debug" if verbose else level
    _logging.basicConfig(
        level=getattr(_logging, effective.upper(), _logging.WARNING),
        format=_LOG_FORMAT,
        stream=_sys.stderr,
    )


def _fail(message: str) -> _typing.NoReturn:
    _click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(armory.__version__, "-v", "--version", prog_name="armory")
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging (shows skipped resources and why)",
)
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """
    Armory - skill and subagent discovery.

    Inspect what the discovery engine sees in the configured search roots.

    \b
    Examples:
        armory skill list                 # Roots and discovered skills
        armory skill show pdf-tools       # One skill, fully loaded
        armory agent list --json          # Subagents as JSON
        armory config show                # Effective configuration
    """
    try:
        settings = config.Settings()
    except config.ConfigFileError as e:
        _fail(str(e))
    except ValueError as e:
        _fail(f"invalid configuration: {e}")

    _configure_logging(settings.logging.level, verbose)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose


# =============================================================================
# Shared resource commands
# =============================================================================


def _create_registry(settings: config.Settings, kind: str) -> resources.ResourceRegistry:
    if kind == "skill":
        return skills.create_skill_registry(settings)
    return agents.create_subagent_registry(settings)


def _list_resources(settings: config.Settings, kind: str, json_output: bool) -> None:
    registry = _create_registry(settings, kind)
    result = registry.discover()

    if json_output:
        _click.echo(_json.dumps(result.to_dict(), indent=2))
        return

    _click.echo(f"{kind.capitalize()} Discovery Paths:")
    for root in registry.roots:
        exists = "✓" if _pathlib.Path(root.path).is_dir() else "(not found)"
        _click.echo(f"  {root.path} [{root.source_type.value}] {exists}")
    _click.echo()

    if not result.resources:
        _click.echo(f"No {kind}s found.")
        return

    _click.echo(f"Discovered {kind.capitalize()}s ({result.total_count}):")
    _click.echo(f"{'Name':<30} {'Source':<16} {'Description'}")
    _click.echo("-" * 70)
    for info in result.resources:
        description = info.description
        if len(description) > 40:
            description = description[:37] + "..."
        _click.echo(f"{info.name:<30} {info.source_type.value:<16} {description}")


def _show_resource(
    settings: config.Settings, kind: str, name: str, json_output: bool, body: bool
) -> None:
    registry = _create_registry(settings, kind)
    registry.discover()

    try:
        resources.validate_name(name, kind)
        info = registry.get_by_name(name)
        loaded = registry.load_full(name)
    except resources.ResourceError as e:
        if json_output:
            _click.echo(_json.dumps({"error": str(e)}))
            raise SystemExit(1) from e
        _fail(str(e))

    if json_output:
        data = info.to_dict()
        data["body_lines"] = loaded.body_line_count
        if body:
            data["body"] = loaded.body
        _click.echo(_json.dumps(data, indent=2))
        return

    _click.echo(f"{kind.capitalize()}: {info.name}")
    _click.echo(f"  Description: {info.description}")
    _click.echo(f"  Path: {info.directory_path}")
    _click.echo(f"  Source: {info.source_type.value}")
    _click.echo(f"  Body lines: {loaded.body_line_count}")
    limit = loaded.body_soft_limit
    if limit is not None and loaded.body_line_count > limit:
        _click.echo(f"  ⚠ Exceeds recommended limit of {limit} lines")
    if info.allowed_tools:
        _click.echo(f"  Allowed tools: {' '.join(info.allowed_tools)}")
    for key, value in info.extensions.items():
        if value not in (None, "", 0, {}, []):
            _click.echo(f"  {key}: {value}")

    if body:
        _click.echo()
        _click.echo("--- Body ---")
        _click.echo(loaded.body)


def _validate_resources(settings: config.Settings, kind: str, json_output: bool) -> None:
    registry = _create_registry(settings, kind)
    result = registry.discover()
    failures = registry.validate_all()

    if json_output:
        _click.echo(
            _json.dumps(
                {
                    "total_count": result.total_count,
                    "valid": not failures,
                    "errors": {name: str(error) for name, error in sorted(failures.items())},
                },
                indent=2,
            )
        )
    elif failures:
        _click.echo(f"✗ {len(failures)} invalid {kind}(s):")
        for name, error in sorted(failures.items()):
            _click.echo(f"  {name}: {error}")
    else:
        _click.echo(f"✓ {result.total_count} {kind}(s) valid")

    if failures:
        raise SystemExit(1)


# =============================================================================
# Skill Commands
# =============================================================================


@cli.group(name="skill")
def skill_group() -> None:
    """Skill discovery commands."""
    pass


@skill_group.command(name="list")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def skill_list(ctx: _click.Context, json_output: bool) -> None:
    """List search roots and all discovered skills."""
    _list_resources(ctx.obj["settings"], "skill", json_output)


@skill_group.command(name="show")
@_click.argument("name")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.option("--body", is_flag=True, help="Show full skill body")
@_click.pass_context
def skill_show(ctx: _click.Context, name: str, json_output: bool, body: bool) -> None:
    """Show details for a specific skill."""
    _show_resource(ctx.obj["settings"], "skill", name, json_output, body)


@skill_group.command(name="validate")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def skill_validate(ctx: _click.Context, json_output: bool) -> None:
    """Validate every discovered skill."""
    _validate_resources(ctx.obj["settings"], "skill", json_output)


# =============================================================================
# Agent Commands
# =============================================================================


@cli.group(name="agent")
def agent_group() -> None:
    """Subagent discovery commands."""
    pass


@agent_group.command(name="list")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def agent_list(ctx: _click.Context, json_output: bool) -> None:
    """List search roots and all discovered subagents."""
    _list_resources(ctx.obj["settings"], "agent", json_output)


@agent_group.command(name="show")
@_click.argument("name")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.option("--body", is_flag=True, help="Show the system prompt")
@_click.pass_context
def agent_show(ctx: _click.Context, name: str, json_output: bool, body: bool) -> None:
    """Show details for a specific subagent."""
    _show_resource(ctx.obj["settings"], "agent", name, json_output, body)


@agent_group.command(name="validate")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def agent_validate(ctx: _click.Context, json_output: bool) -> None:
    """Validate every discovered subagent."""
    _validate_resources(ctx.obj["settings"], "agent", json_output)


# =============================================================================
# Config Commands
# =============================================================================


@cli.group(name="config")
def config_cmd() -> None:
    """Configuration commands."""
    pass


@config_cmd.command(name="show")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def config_show(ctx: _click.Context, as_json: bool) -> None:
    """Show effective configuration from all sources.

    Displays the merged configuration from built-in defaults, user config,
    project config and ARMORY_* environment variables. Unknown keys are
    reported on stderr.
    """
    settings: config.Settings = ctx.obj["settings"]
    full_config = settings.model_dump(mode="json")

    if as_json:
        _click.echo(_json.dumps(full_config, indent=2))
    else:
        _click.echo(_yaml.dump(full_config, default_flow_style=False, sort_keys=False), nl=False)

    for path, value in settings.collect_all_extra_fields().items():
        _click.echo(f"Warning: unknown config key '{path}' = {value!r}", err=True)


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="armory")


if __name__ == "__main__":
    main()
