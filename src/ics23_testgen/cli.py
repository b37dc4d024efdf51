"""
Command line entry point.

Usage::

    testgen exist left
    testgen nonexist middle 10
    testgen -v nonexist right 400 > nonexist_right.json

Arguments:
    MODE      exist | nonexist
    POSITION  left | middle | right
    SIZE      number of entries in the universe (default: 400)

The fixture JSON goes to standard output. On any error nothing is written
to standard output; the error and the usage line go to standard error and
the exit status is 1.
"""

from __future__ import annotations

import logging
import sys
from typing import Sequence

import click

from ics23_testgen.config import DEFAULT_UNIVERSE_SIZE, MAX_UNIVERSE_SIZE
from ics23_testgen.generator import generate_fixture
from ics23_testgen.log import setup_logging
from ics23_testgen.selection import Mode, Position
from ics23_testgen.types import TestgenError

logger = logging.getLogger(__name__)

PROG_NAME = "testgen"


@click.command(PROG_NAME, context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("mode", type=click.Choice([m.value for m in Mode]))
@click.argument("position", type=click.Choice([p.value for p in Position]))
@click.argument(
    "size",
    type=click.IntRange(min=1, max=MAX_UNIVERSE_SIZE),
    required=False,
    default=DEFAULT_UNIVERSE_SIZE,
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("--no-color", is_flag=True, help="Disable colored logging output")
def cli(mode: str, position: str, size: int, verbose: bool, no_color: bool) -> None:
    """
    Generate one ICS23 proof fixture and print it as JSON.

    MODE selects a membership (exist) or non-membership (nonexist) proof.
    POSITION selects where the key sits in the sorted key order. SIZE is
    the number of entries in the deterministic universe (default: 400).
    """
    setup_logging(verbose, no_color)

    fixture = generate_fixture(Mode(mode), Position(position), size)

    # Render fully before writing so a failure never leaves partial output.
    text = fixture.to_json()
    click.echo(text, nl=False)


def _usage() -> str:
    ctx = click.Context(cli, info_name=PROG_NAME)
    return ctx.get_usage()


def main(argv: Sequence[str] | None = None) -> None:
    """
    Run the command and map every failure to exit status 1.

    Click reports usage errors with status 2 by default; this wrapper keeps
    a single failure status for argument, selection, backend and encoding
    errors alike.
    """
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        cli.main(args=args, prog_name=PROG_NAME, standalone_mode=False)
    except click.ClickException as e:
        # Usage errors print the usage line themselves.
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    except TestgenError as e:
        logger.debug("Fixture generation failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        click.echo(_usage(), err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
