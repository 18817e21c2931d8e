"""
CLI commands for scrucheck.
"""

import click
import sys
from rich.console import Console

from scrucheck.context.formats import SCRU128, SCRU128_V1
from scrucheck.errors import NoValidRecordError
from scrucheck.models import IdFormat
from scrucheck.services import IdentifierChecker
from scrucheck.settings import CheckerSettings

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])

# Diagnostics go to stderr, without markup or automatic highlighting
console = Console(stderr=True, highlight=False)


class PipeCommand(click.Command):
    """Command whose usage line shows the expected pipe invocation."""

    def format_usage(self, ctx, formatter):
        formatter.write(f"Usage: any-command-that-prints-identifiers-infinitely | {ctx.command_path}\n")


def print_error(message: str):
    console.print(f"Error: {message}", style="bold red", markup=False, soft_wrap=True)


def check_stream(stream, settings: CheckerSettings) -> int:
    """
    Check every line of a binary stream and return the exit status.

    Reports go to stdout, per-line errors to stderr.
    """
    checker = IdentifierChecker(
        settings,
        report_sink=lambda report: click.echo(report.format()),
        error_sink=lambda outcome: print_error(outcome.message),
    )

    for line in stream:
        checker.feed(line)

    try:
        return checker.finish()
    except NoValidRecordError as exc:
        print_error(str(exc))
        return 1


def make_command(fmt: IdFormat, prog_name: str) -> click.Command:
    """Build the checker command for one identifier format."""

    @click.command(
        name=prog_name,
        cls=PipeCommand,
        context_settings=CONTEXT_SETTINGS,
        help=f"Check {fmt.name} identifiers read from stdin, one per line.",
    )
    def command():
        settings = CheckerSettings(fmt=fmt)
        click.echo(
            "Reading IDs from stdin and will show stats every "
            f"{settings.report_interval_ms // 1000} seconds. Press Ctrl-C to quit."
        )

        try:
            exit_code = check_stream(click.get_binary_stream('stdin'), settings)
        except KeyboardInterrupt:
            sys.exit(130)
        sys.exit(exit_code)

    return command


check = make_command(SCRU128, "scru128-test")
check_v1 = make_command(SCRU128_V1, "scru128-test-v1")
