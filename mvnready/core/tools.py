"""External tool discovery."""
import shutil

from rich.console import Console
from rich.panel import Panel

from mvnready.core.errors import ToolNotFoundError

INSTALL_HINTS = {
    'mvn': (
        'This command requires [bold blue]Apache Maven[/] to build the project '
        'and resolve POM properties.\n'
        'Download: [link=https://maven.apache.org/download.cgi][blue]https://maven.apache.org/download.cgi[/link]\n\n'
        '[bold]Option 1: Using Homebrew (macOS)[/]\n'
        '  [blue]brew install maven[/]\n\n'
        '[bold]Option 2: Using apt (Debian/Ubuntu)[/]\n'
        '  [blue]sudo apt-get install maven[/]\n\n'
        'After installation, ensure [bold]mvn[/] is in your [bold]PATH[/].'
    ),
}


def check_tool_installed(tool: str, console: Console | None = None) -> str:
    """
    Return the resolved path of `tool`, or print an installation guide and
    raise ToolNotFoundError.
    """
    resolved = shutil.which(tool)
    if resolved:
        return resolved

    console = console or Console(stderr=True)
    hint = INSTALL_HINTS.get(
        tool, f"Please install [bold]{tool}[/] and ensure it is in your [bold]PATH[/].",
    )
    console.print()
    console.print(
        Panel(
            f"[bold]{tool} Not Found[/]\n\n{hint}",
            title='[bold red]Dependency Missing[/]',
            title_align='left',
            border_style='red',
            padding=(1, 2),
        ),
    )
    raise ToolNotFoundError(tool)


def check_tools_installed(tools: list[str], console: Console | None = None) -> None:
    for tool in tools:
        check_tool_installed(tool, console=console)
