"""Human readable PASS/FAIL output for a readiness run."""
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mvnready.core.logging import console as default_console
from mvnready.core.logging import err_console as default_err_console
from mvnready.models.check import CheckCategory
from mvnready.models.check import CheckReport
from mvnready.models.check import CheckResult
from mvnready.services.readiness_service import ReadinessReporter

SECTION_HEADINGS = {
    CheckCategory.METADATA: 'Basic Metadata Checks...',
    CheckCategory.EFFECTIVE_POM: 'Advanced Metadata Checks...',
    CheckCategory.SECTION: 'Advanced Metadata Checks...',
    CheckCategory.FORBIDDEN_REFERENCE: 'Advanced Metadata Checks...',
    CheckCategory.ARTIFACT: 'Artifact Checks...',
    CheckCategory.SIGNATURE: 'Signature Checks...',
}


class ConsoleReporter(ReadinessReporter):
    """PASS lines to stdout, FAIL lines to stderr, one heading per check group."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or default_console
        self.err_console = err_console or default_err_console
        self._heading: str | None = None

    def on_build_start(self, project_dir: Path) -> None:
        self.console.print('Quick Building the Maven Project...')

    def on_build_complete(self, project_dir: Path) -> None:
        self.console.print('Maven Build completed')
        self.console.print('---')
        self.console.print()

    def on_pom_start(self, label: str) -> None:
        self._heading = None
        self.console.print(f"[bold]Testing POM file {escape(label)}...[/bold]")

    def on_result(self, result: CheckResult) -> None:
        heading = SECTION_HEADINGS[result.category]
        if heading != self._heading:
            self._heading = heading
            self.console.print(heading)

        if result.passed:
            self.console.print(f"  [green]PASS:[/green] {escape(result.message)}", highlight=False, soft_wrap=True)
        else:
            self.err_console.print(f"  [bold red]FAIL:[/bold red] {escape(result.message)}", highlight=False, soft_wrap=True)

    def on_pom_complete(self, label: str) -> None:
        self.console.print('---')
        self.console.print()

    def print_summary(self, report: CheckReport) -> None:
        summary = report.summary_by_pom()
        if summary:
            table = Table(title='POM Readiness Summary')
            table.add_column('POM', style='cyan')
            table.add_column('Passed', style='green', justify='right')
            table.add_column('Failed', style='red', justify='right')
            for pom, (passed, failed) in summary.items():
                table.add_row(escape(pom), str(passed), str(failed))
            self.console.print(table)

        if report.passed:
            self.console.print(
                f"[bold green]Maven Project in {escape(report.project_dir)} appears ready for Maven Central[/bold green]",
            )
        else:
            self.err_console.print(
                f"[bold red]Maven Project in {escape(report.project_dir)} had various errors, "
                'please see above output for details[/bold red]',
            )
