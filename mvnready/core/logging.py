import logging
import os
import sys
from typing import Any

import structlog
from rich.console import Console

# Report output: PASS lines and summaries go to stdout, FAIL lines to stderr
console = Console()
err_console = Console(stderr=True)


class RichConsoleRenderer:
    """
    A structlog renderer that prints events as key=value pairs on stderr,
    keeping stdout free for the check report.
    An optional '_style' key in the event dict overrides the line style.
    """

    def __init__(self, target: Console | None = None):
        self._console = target or err_console
        self._level_styles = {
            'debug': 'dim',
            'info': 'blue',
            'warning': 'yellow',
            'error': 'bold red',
            'critical': 'bold magenta',
        }

    def __call__(self, logger, name, event_dict):
        custom_style = event_dict.pop('_style', None)

        event = event_dict.pop('event', '')
        log_level = event_dict.pop('level', 'info')
        logger_name = event_dict.pop('logger', None)
        timestamp = event_dict.pop('timestamp', '')
        exception = event_dict.pop('exception', None)
        exc_info = event_dict.pop('exc_info', None)

        parts = []
        if timestamp:
            parts.append(f"[dim]{timestamp}[/dim]")
        level_style = self._level_styles.get(log_level, 'white')
        parts.append(f"[{level_style}]{log_level:<8}[/{level_style}]")
        if logger_name:
            parts.append(f"[bold]{logger_name}[/bold]")
        parts.append(event)
        for key, value in event_dict.items():
            parts.append(f"[cyan]{key}[/cyan]=[green]{value!r}[/green]")

        line = ' '.join(parts)
        if exception or exc_info:
            line += f"\n[red]{exception or exc_info}[/red]"

        self._console.print(line, style=custom_style, highlight=False)
        raise structlog.DropEvent


def drop_style_processor(logger, method_name, event_dict):
    """Keep the internal '_style' hint out of JSON output."""
    event_dict.pop('_style', None)
    return event_dict


def setup_logging(level: str = 'INFO') -> None:
    """Configure structlog once for the whole CLI."""
    logging.basicConfig(format='%(message)s', stream=sys.stderr, level=level)

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt='%H:%M:%S'),
        structlog.processors.UnicodeDecoder(),
    ]

    if os.getenv('ENV') == 'production':
        processors = shared_processors + [
            drop_style_processor,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            RichConsoleRenderer(),
        ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
