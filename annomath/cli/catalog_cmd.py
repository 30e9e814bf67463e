# annomath/cli/catalog_cmd.py

"""
CLI commands for inspecting the annotation pattern catalog.
"""

import logging

import click
from rich.console import Console
from rich.table import Table
from tabulate import tabulate

from annomath.core.catalog import CATALOG, match_rules
from annomath.host.api import FunctionKind
from .base_cmd import get_config

logger = logging.getLogger(__name__)
console = Console()

_KIND_CHOICES = [kind.value for kind in FunctionKind]

# --- Catalog Command Group ---

@click.group("catalog")
def catalog_cmd():
    """Inspect the annotation pattern catalog."""
    pass


@catalog_cmd.command("list")
@click.pass_context
def list_rules(ctx):
    """List every catalog rule in matching order."""
    disabled = set(get_config(ctx).catalog.disabled_rules)

    table = Table(title="annomath Catalog Rules", show_header=True, header_style="bold magenta")
    table.add_column("Name", style="dim cyan")
    table.add_column("Operation")
    table.add_column("Arity", justify="right")
    table.add_column("Kinds")
    table.add_column("Status")

    for rule in CATALOG:
        status = "[yellow]disabled[/yellow]" if rule.name in disabled else "[green]enabled[/green]"
        kinds = ", ".join(sorted(kind.value for kind in rule.kinds))
        table.add_row(rule.name, rule.operation.value, str(rule.arity), kinds, status)

    console.print(table)


@catalog_cmd.command("match")
@click.argument("annotation", type=str)
@click.option("--kind", type=click.Choice(_KIND_CHOICES), default=FunctionKind.VALUE.value, show_default=True,
              help="Kind of the function the annotation belongs to.")
@click.pass_context
def match_annotation(ctx, annotation: str, kind: str):
    """Show which rules an ANNOTATION would trigger."""
    disabled = get_config(ctx).catalog.disabled_rules
    matched = match_rules(annotation, FunctionKind(kind), disabled)
    if not matched:
        click.echo("No matching rules.")
        return
    rows = [(rule.name, rule.operation.value, rule.template) for rule in matched]
    click.echo(tabulate(rows, headers=["Rule", "Operation", "Template"], tablefmt="grid"))
