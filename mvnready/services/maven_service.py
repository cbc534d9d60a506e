import subprocess
import time
from pathlib import Path

import structlog

from mvnready.core.config import get_config
from mvnready.core.config import MavenConfig
from mvnready.core.errors import BuildFailedError
from mvnready.core.errors import MavenCommandError

logger = structlog.get_logger('maven_service')


class MavenService:
    """Runs Maven goals against individual POM files."""

    def __init__(self, config: MavenConfig | None = None):
        self.config = config or get_config().maven

    def _run(self, args: list[str]) -> subprocess.CompletedProcess:
        command = [self.config.executable, *args]
        start_time = time.time()
        process = subprocess.run(
            command, capture_output=True, text=True, check=False,
        )
        elapsed = time.time() - start_time
        logger.debug(
            'Maven Command',
            command=' '.join(command),
            returncode=process.returncode,
            elapsed=f"{elapsed:.3f}s",
        )
        if process.returncode != 0:
            output = (process.stdout or '') + (process.stderr or '')
            raise MavenCommandError(command, process.returncode, output)
        return process

    def build(self, project_dir: Path, log_path: Path | None = None) -> Path:
        """
        Clean install the project, skipping tests, with all output captured
        to the build log. Raises BuildFailedError carrying the log on failure.
        """
        log_path = log_path or self.config.build_log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        command = [
            self.config.executable, '-f', str(project_dir / 'pom.xml'),
            'clean', 'install', '-DskipTests',
        ]

        start_time = time.time()
        with open(log_path, 'w', encoding='utf-8') as log:
            process = subprocess.run(
                command, stdout=log, stderr=subprocess.STDOUT, text=True, check=False,
            )
        elapsed = time.time() - start_time

        if process.returncode != 0:
            logger.error(
                'Maven Build Failed',
                command=' '.join(command),
                returncode=process.returncode,
                log=str(log_path),
                elapsed=f"{elapsed:.3f}s",
            )
            raise BuildFailedError(
                log_path.read_text(encoding='utf-8', errors='replace'), log_path,
            )

        logger.info(
            'Maven Build completed',
            log=str(log_path), elapsed=f"{elapsed:.3f}s",
        )
        return log_path

    def get_property(self, pom: Path, name: str) -> str:
        """
        Evaluate ${name} in the context of `pom` using exec:exec with echo.
        An expression Maven could not interpolate comes back verbatim and is
        reported as unset.
        """
        expression = f"${{{name}}}"
        process = self._run([
            '-q', '-f', str(pom),
            '-Dexec.executable=echo',
            f"-Dexec.args={expression}",
            '--non-recursive',
            'exec:exec',
        ])
        value = process.stdout.strip()
        if value == expression:
            return ''
        return value

    def generate_effective_pom(self, pom: Path, output: Path | None = None) -> Path:
        """Write the effective POM for `pom` to `output`, replacing any previous one."""
        output = output or self.config.effective_pom_path
        output.parent.mkdir(parents=True, exist_ok=True)
        output.unlink(missing_ok=True)

        args = ['-f', str(pom), 'help:effective-pom', f"-Doutput={output}"]
        self._run(args)
        if not output.is_file():
            raise MavenCommandError(
                [self.config.executable, *args], 0,
                f"effective POM was not written to {output}",
            )
        return output
