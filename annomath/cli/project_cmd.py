# annomath/cli/project_cmd.py

"""
CLI commands for rewriting, restoring and calling functions of a JSON project file.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from annomath.core.coercion import format_number
from annomath.core.transactions import EngineState, RewriteEngine
from annomath.host.api import HostError
from annomath.host.memory import MemoryHost, ProjectFormatError, load_project, save_project
from .base_cmd import EchoNotifier, build_dispatcher, get_config

logger = logging.getLogger(__name__)

# --- Helpers ---

def _open_project(project: str) -> MemoryHost:
    try:
        return load_project(project, notifier=EchoNotifier())
    except ProjectFormatError as e:
        raise click.UsageError(f"Invalid project file: {e}")


def _engine(ctx: click.Context, host: MemoryHost, state: EngineState = None) -> RewriteEngine:
    config = get_config(ctx)
    return RewriteEngine(
        host,
        dispatcher=build_dispatcher(config, host.notifier),
        state=state,
        disabled_rules=config.catalog.disabled_rules,
    )


def _output_path(ctx: click.Context, project: str, output: Optional[str]) -> Path:
    """Returns the -o path, or the project file name inside paths.output_dir."""
    if output:
        return Path(output)
    output_dir = get_config(ctx).paths.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / Path(project).name


def _write_state(state: EngineState, path: Path) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"is_replaced": state.is_replaced, "backups": state.backups}, f, ensure_ascii=False, indent=2)
    logger.info(f"Saved {len(state.backups)} snapshot(s) to {path}")


def _read_state(path: Path) -> EngineState:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise click.UsageError(f"Backups file '{path}' is not valid JSON: {e}")
    if not isinstance(data, dict) or not isinstance(data.get("backups"), dict):
        raise click.UsageError(f"Backups file '{path}' must contain a 'backups' object.")
    return EngineState(is_replaced=bool(data.get("is_replaced", True)), backups=data["backups"])

# --- Project Command Group ---

@click.group("project")
def project_cmd():
    """Rewrite and restore functions of a JSON project file."""
    pass


@project_cmd.command("rewrite")
@click.argument("project", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("-o", "--output", type=click.Path(dir_okay=False, resolve_path=True), default=None,
              help="Path of the rewritten project file [default: <paths.output_dir>/<PROJECT name>].")
@click.option("--backups", type=click.Path(dir_okay=False, resolve_path=True), default=None,
              help="Where to save the snapshots needed by 'project restore'.")
@click.pass_context
def rewrite_project(ctx, project: str, output: str, backups: str):
    """Rewrite every function of PROJECT whose annotation matches a catalog rule."""
    host = _open_project(project)
    engine = _engine(ctx, host)
    result = engine.apply()
    output = _output_path(ctx, project, output)
    save_project(host, output)
    if backups:
        _write_state(engine.state, Path(backups))
    for function_id, rule_name in result.rewritten:
        click.echo(f"{function_id}: {rule_name}")
    for function_id in result.failed:
        click.echo(f"{function_id}: commit failed", err=True)
    click.echo(f"Rewrote {result.count} function definition(s) -> {output}")


@project_cmd.command("restore")
@click.argument("project", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--backups", type=click.Path(exists=True, dir_okay=False, resolve_path=True), required=True,
              help="Snapshots written by 'project rewrite --backups'.")
@click.option("-o", "--output", type=click.Path(dir_okay=False, resolve_path=True), default=None,
              help="Path of the restored project file [default: <paths.output_dir>/<PROJECT name>].")
@click.pass_context
def restore_project(ctx, project: str, backups: str, output: str):
    """Restore the original function bodies of a rewritten PROJECT."""
    host = _open_project(project)
    engine = _engine(ctx, host, state=_read_state(Path(backups)))
    result = engine.undo()
    output = _output_path(ctx, project, output)
    save_project(host, output)
    for function_id in result.missing:
        click.echo(f"{function_id}: no longer in project, skipped", err=True)
    click.echo(f"Restored {len(result.restored)} function definition(s) -> {output}")


@project_cmd.command("call")
@click.argument("project", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("function_id", type=str)
@click.argument("args", nargs=-1, type=str)
@click.pass_context
def call_function(ctx, project: str, function_id: str, args: Tuple[str, ...]):
    """Rewrite PROJECT in memory and call FUNCTION_ID with ARGS."""
    host = _open_project(project)
    engine = _engine(ctx, host)
    engine.apply()
    try:
        result = engine.call(function_id, list(args))
    except HostError as e:
        raise click.ClickException(str(e))
    if result is not None:
        click.echo(result if isinstance(result, str) else format_number(result))
