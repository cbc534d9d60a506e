from pathlib import Path

import dotenv
import structlog
import typer

from mvnready.core.config import get_config
from mvnready.core.decorators import handle_errors
from mvnready.core.reporter import ConsoleReporter
from mvnready.services.readiness_service import ReadinessService

dotenv.load_dotenv()

logger = structlog.get_logger('check_command')


@handle_errors
def main(
    directory: Path | None = typer.Argument(
        None, help='Root of the Maven project (must contain pom.xml)', show_default=False,
    ),
    continue_on_error: bool | None = typer.Option(
        None, '--continue-on-error/--fail-fast',
        help='Run every check and report all failures instead of stopping at the first. '
        'Defaults to on when CONTINUE_ON_ERROR is set.',
        show_default=False,
    ),
    report_path: Path | None = typer.Option(
        None, '--report', help='Write the full check report as JSON to this file',
    ),
):
    """
    Check that a Maven project is ready for release to Maven Central.
    """
    config = get_config()
    if continue_on_error is not None:
        config.continue_on_error = continue_on_error

    reporter = ConsoleReporter()
    report = ReadinessService(config).run(directory, reporter=reporter)

    if report_path:
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(report.model_dump_json(indent=2), encoding='utf-8')
        logger.info('Report written', path=str(report_path))

    reporter.print_summary(report)
    if not report.passed:
        raise typer.Exit(1)
