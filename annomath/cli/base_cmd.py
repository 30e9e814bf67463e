# annomath/cli/base_cmd.py

"""
Base setup for CLI commands: configuration loading and logging initialization.
"""

import logging
import sys

import click

from annomath.config import load_configuration, numeric_options, AnnomathConfig
from annomath.core.dispatch import ExpressionDispatcher
from annomath.host.api import Notifier
from annomath.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


class ConfigGroup(click.Group):
    """
    A custom Click Group that loads configuration and sets up logging before
    invoking the group or its subcommands. The config is passed via ctx.obj.
    Setup failures exit with code 1; command errors propagate to Click.
    """
    def invoke(self, ctx: click.Context):
        if ctx.obj is None:
            ctx.obj = {}

        setup_success = False
        try:
            if 'config' not in ctx.obj:
                config = load_configuration()
                ctx.obj['config'] = config

                verbosity = 0
                if ctx.params.get('quiet', False):
                    verbosity = -1
                elif ctx.params.get('verbose', 0) > 0:
                    verbosity = ctx.params['verbose']
                setup_logging(config, verbosity)
                logger.debug("Logging setup complete in ConfigGroup.")
            else:
                logger.debug("Configuration already loaded in context.")

            setup_success = True
            return super().invoke(ctx)

        except click.exceptions.Exit:
            raise
        except Exception as e:
            if not setup_success:
                logging.getLogger("annomath.error").critical(f"Critical error during CLI setup: {e!r}", exc_info=True)
                print(f"CRITICAL SETUP ERROR: {e!r}", file=sys.stderr)
                ctx.exit(1)
            raise


def get_config(ctx: click.Context) -> AnnomathConfig:
    """Returns the config loaded by ConfigGroup, or the defaults outside of it."""
    if isinstance(ctx.obj, dict) and 'config' in ctx.obj:
        return ctx.obj['config']
    return AnnomathConfig()


def build_dispatcher(config: AnnomathConfig, notifier: Notifier) -> ExpressionDispatcher:
    """Creates a dispatcher honouring the [special] and [evaluator] settings."""
    return ExpressionDispatcher(
        notifier=notifier,
        options=numeric_options(config),
        advisory_message=config.evaluator.advisory_message,
    )

# --- Common CLI Options ---
verbose_option = click.option(
    '-v', '--verbose',
    count=True,
    help="Increase verbosity level (-v for INFO, -vv for DEBUG)."
)
quiet_option = click.option(
    '-q', '--quiet',
    is_flag=True,
    default=False,
    help="Suppress all console output except critical errors."
)


class EchoNotifier(Notifier):
    """Prints alerts to stdout and advisories to stderr."""

    def alert(self, message: str) -> None:
        click.echo(f"ALERT: {message}")

    def advise(self, message: str) -> None:
        click.echo(f"Warning: {message}", err=True)
