"""Exception hierarchy for mvnready."""


class MvnReadyError(Exception):
    """Base class for all mvnready errors."""


class ToolNotFoundError(MvnReadyError):
    """A required external executable is not on PATH."""

    def __init__(self, tool: str):
        super().__init__(f"Required command {tool} not found")
        self.tool = tool


class ValidationError(MvnReadyError):
    """Validation error."""


class MavenCommandError(MvnReadyError):
    """A Maven invocation exited non-zero or did not produce its output."""

    def __init__(self, command: list[str], returncode: int, output: str = ''):
        super().__init__(
            f"Maven command failed with exit code {returncode}: {' '.join(command)}",
        )
        self.command = command
        self.returncode = returncode
        self.output = output


class BuildFailedError(MvnReadyError):
    """The project build failed, so there are no artifacts to validate."""

    def __init__(self, log: str, log_path=None):
        super().__init__('Maven Build Failed')
        self.log = log
        self.log_path = log_path
