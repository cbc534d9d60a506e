import functools
from collections.abc import Callable
from typing import Any

import structlog
import typer
from rich.markup import escape

from mvnready.core.errors import BuildFailedError
from mvnready.core.errors import MvnReadyError
from mvnready.core.errors import ToolNotFoundError
from mvnready.core.logging import console
from mvnready.core.logging import err_console
logger = structlog.get_logger()


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn fatal mvnready errors into a FAIL line and exit code 1."""
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except BuildFailedError as e:
            # Dump the captured build output so the cause is visible
            console.print(e.log, markup=False, highlight=False, emoji=False, soft_wrap=True)
            err_console.print(f"  [bold red]FAIL:[/] {e}")
            raise typer.Exit(1)
        except ToolNotFoundError as e:
            err_console.print(f"[bold red]{e}[/]")
            raise typer.Exit(1)
        except MvnReadyError as e:
            err_console.print(f"  [bold red]FAIL:[/] {escape(str(e))}")
            logger.debug('Fatal error', exc_info=True)
            raise typer.Exit(1)
        except KeyboardInterrupt:
            err_console.print('\n[yellow]Operation cancelled by user.[/]')
            raise typer.Exit(130)
        except Exception as e:
            err_console.print(f"[bold red]Unexpected Error:[/] {escape(str(e))}")
            logger.exception('Unexpected error')
            raise typer.Exit(1)
    return wrapper
