"""Plumbing shared by the ha-lights and ha-thermostat commands"""

import logging
import sys
from collections.abc import Callable
from typing import NoReturn

import click

from ha_control.errors import ConfigError, ExitCode, HAControlError

logger = logging.getLogger(__name__)

debug_option = click.option(
    "--debug",
    is_flag=True,
    help="Log each request and print tracebacks on errors",
)


def configure_logging(debug: bool) -> None:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("ha_control").setLevel(logging.DEBUG if debug else logging.WARNING)


def run_guarded(body: Callable[[], ExitCode]) -> NoReturn:
    """Run a command body and exit with the code for its outcome.

    This is the only catch-all. Click's own usage errors and aborts pass
    through so click can report them.
    """
    try:
        code = body()
    except (click.ClickException, click.Abort):
        raise
    except ConfigError as error:
        click.echo(f"❌ Error: {error}", err=True)
        if error.hint:
            click.echo(f"   {error.hint}", err=True)
        sys.exit(int(error.exit_code))
    except HAControlError as error:
        click.echo(f"❌ Error: {error}", err=True)
        logger.debug("Command failed", exc_info=True)
        sys.exit(int(error.exit_code))
    except Exception as error:
        click.echo(f"❌ Error: {error}", err=True)
        logger.debug("Unexpected failure", exc_info=True)
        sys.exit(int(ExitCode.UNEXPECTED))
    sys.exit(int(code))
