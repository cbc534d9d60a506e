from collections.abc import Callable
from pathlib import Path

import structlog

from mvnready.core.config import get_config
from mvnready.core.config import MvnReadyConfig
from mvnready.core.tools import check_tools_installed
from mvnready.core.validation import find_pom_files
from mvnready.core.validation import validate_project_dir
from mvnready.models.check import CheckReport
from mvnready.models.check import CheckResult
from mvnready.models.pom import PomDescriptor
from mvnready.services.check_service import PomChecker
from mvnready.services.maven_service import MavenService

logger = structlog.get_logger('readiness_service')


class ReadinessReporter:
    """Callbacks fired while a run progresses. The default does nothing."""

    def on_build_start(self, project_dir: Path) -> None:
        pass

    def on_build_complete(self, project_dir: Path) -> None:
        pass

    def on_pom_start(self, label: str) -> None:
        pass

    def on_result(self, result: CheckResult) -> None:
        pass

    def on_pom_complete(self, label: str) -> None:
        pass


class ReadinessService:
    """
    Validates that a Maven project is ready for release to Maven Central.

    Fatal problems (missing tools, invalid directory, failed build) raise;
    everything else is recorded in the returned CheckReport. Unless
    continue_on_error is set, the walk stops at the first failed check.
    """

    def __init__(
        self,
        config: MvnReadyConfig | None = None,
        maven: MavenService | None = None,
        tool_check: Callable[[list[str]], None] | None = None,
    ):
        self.config = config or get_config()
        self.maven = maven or MavenService(self.config.maven)
        self.tool_check = tool_check or check_tools_installed
        self.checker = PomChecker(
            self.maven, self.config.policy, self.config.maven.effective_pom_path,
        )

    def run(self, directory: Path | None, reporter: ReadinessReporter | None = None) -> CheckReport:
        reporter = reporter or ReadinessReporter()
        continue_on_error = self.config.continue_on_error

        self.tool_check(self.config.required_tools)
        project_dir = validate_project_dir(directory)

        reporter.on_build_start(project_dir)
        self.maven.build(project_dir)
        reporter.on_build_complete(project_dir)

        report = CheckReport(
            project_dir=str(directory), continue_on_error=continue_on_error,
        )
        for pom_path in find_pom_files(project_dir):
            pom = PomDescriptor(pom_path, build_dir_name=self.config.policy.build_dir_name)
            label = pom.display_path(project_dir)
            report.poms.append(label)
            reporter.on_pom_start(label)

            for result in self.checker.check_pom(pom, label):
                report.add(result)
                reporter.on_result(result)
                if not result.passed and not continue_on_error:
                    logger.debug('Stopping at first failure', pom=label, check=result.name)
                    report.stopped_early = True
                    return report

            reporter.on_pom_complete(label)

        logger.debug(
            'Readiness checks complete', poms=len(report.poms),
            checks=len(report.results), errors=report.errors,
        )
        return report
