# annomath/cli/eval_cmd.py

"""
CLI command for running a single expression program.
"""

import logging
from typing import Any, Tuple

import click

from annomath.core.coercion import format_number
from .base_cmd import EchoNotifier, build_dispatcher, get_config

logger = logging.getLogger(__name__)


def _render(value: Any) -> str:
    if isinstance(value, str):
        return value
    return format_number(value)


@click.command("eval")
@click.argument("program", type=str)
@click.option("-p", "--param", "params", multiple=True,
              help="Runtime parameter bound to p[0], p[1], ... (repeatable).")
@click.pass_context
def eval_cmd(ctx, program: str, params: Tuple[str, ...]):
    """
    Run PROGRAM with the given parameters and print the result.

    PROGRAM is an operation tag (e.g. 'vector.dot'), a canonical template, or a
    restricted arithmetic expression such as '(p[0] + 2) * pi'.
    """
    config = get_config(ctx)
    dispatcher = build_dispatcher(config, EchoNotifier())
    logger.info(f"Evaluating {program!r} with params {list(params)}")
    result = dispatcher.execute(program, list(params))
    if result is not None:
        click.echo(_render(result))
