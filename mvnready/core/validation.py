"""Path validation utilities for mvnready."""
from pathlib import Path

from mvnready.core.errors import ValidationError

POM_FILE_NAME = 'pom.xml'


def validate_project_dir(directory: Path | None) -> Path:
    """
    Validate that `directory` is a Maven project root.

    Returns:
        The resolved project directory

    Raises:
        ValidationError if the directory is missing, not a directory, or has
        no top level pom.xml
    """
    if directory is None or str(directory).strip() == '':
        raise ValidationError('No project directory supplied')

    if not directory.exists() or not directory.is_dir():
        raise ValidationError(f"Invalid directory ({directory}) supplied")

    if not (directory / POM_FILE_NAME).is_file():
        raise ValidationError(
            f"Not a Maven project, no top level {POM_FILE_NAME} in {directory}",
        )

    return directory.resolve()


def find_pom_files(project_dir: Path) -> list[Path]:
    """All pom.xml files under the project, in sorted path order."""
    if not project_dir.exists():
        return []
    return sorted(p for p in project_dir.rglob(POM_FILE_NAME) if p.is_file())
