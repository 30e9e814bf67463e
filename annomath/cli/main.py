# annomath/cli/main.py

"""
Main entry point for the annomath CLI application.
Uses Click for command-line interface handling.
"""

import logging

import click

from annomath.version import __version__
from .base_cmd import ConfigGroup, verbose_option, quiet_option
from .catalog_cmd import catalog_cmd
from .eval_cmd import eval_cmd
from .project_cmd import project_cmd

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


@click.group(context_settings=CONTEXT_SETTINGS, cls=ConfigGroup)
@click.version_option(__version__, '-V', '--version', package_name='annomath', prog_name='annomath')
@verbose_option
@quiet_option
@click.pass_context
def main_cli(ctx, verbose: int, quiet: bool):
    """
    annomath: rewrite annotated block functions into sandboxed math programs.

    Configuration is loaded from:
    Defaults -> ./annomath.toml -> ~/.config/annomath/annomath.toml -> Env Vars

    Use -v for verbose output, -vv for debug output, -q for quiet mode.
    """
    logger.debug(f"annomath CLI group invoked (verbose={verbose}, quiet={quiet}).")


main_cli.add_command(eval_cmd)
main_cli.add_command(catalog_cmd)
main_cli.add_command(project_cmd)

cli = main_cli

if __name__ == "__main__":
    cli()
