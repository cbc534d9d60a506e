import sys

import click
import typer

from mvnready.__version__ import __version__
from mvnready.commands import check
from mvnready.core.logging import setup_logging

app = typer.Typer(
    help='mvnready: check a Maven project is ready for release to Maven Central.',
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)

app.command(name='check')(check.main)


def _print_version(value: bool):
    if value:
        typer.echo(f"mvnready {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    debug: bool = typer.Option(False, '--debug', help='Enable debug logging'),
    version: bool = typer.Option(
        False, '--version', callback=_print_version, is_eager=True,
        help='Show the version and exit',
    ),
):
    """
    mvnready CLI - Maven Central release readiness checks.
    """
    level = 'DEBUG' if debug else 'INFO'
    setup_logging(level=level)


def cli(args: list[str] | None = None) -> None:
    """Console entry point. Usage errors exit 1 like any other invalid invocation."""
    command = typer.main.get_command(app)
    try:
        exit_code = command.main(args=args, prog_name='mvnready', standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        click.echo('Aborted!', err=True)
        sys.exit(1)
    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == '__main__':
    cli()
