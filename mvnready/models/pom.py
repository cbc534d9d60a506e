import xml.etree.ElementTree as ET
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from mvnready.core.errors import ValidationError


def _local_name(tag: str) -> str:
    return tag.split('}', 1)[1] if '}' in tag else tag


@dataclass
class PomDescriptor:
    """One pom.xml inside the project tree."""
    path: Path
    build_dir_name: str = 'target'

    @property
    def directory(self) -> Path:
        return self.path.parent

    @property
    def build_dir(self) -> Path:
        return self.directory / self.build_dir_name

    @cached_property
    def text(self) -> str:
        return self.path.read_text(encoding='utf-8', errors='replace')

    def display_path(self, root: Path) -> str:
        """Path relative to the project root, as the user typed it."""
        try:
            return f"./{self.path.relative_to(root).as_posix()}"
        except ValueError:
            return str(self.path)


class EffectivePom:
    """
    A parsed help:effective-pom document.

    Multi-module output wraps several <project> elements inside <projects>;
    queries are always made against the last one.
    """

    def __init__(self, root: ET.Element):
        self.root = root
        self.project = self._select_project(root)

    @classmethod
    def parse(cls, path: Path) -> 'EffectivePom':
        try:
            tree = ET.parse(path)
        except (ET.ParseError, OSError) as e:
            raise ValidationError(f"Could not parse effective POM {path}: {e}")
        return cls(tree.getroot())

    @classmethod
    def from_string(cls, text: str) -> 'EffectivePom':
        try:
            return cls(ET.fromstring(text))
        except ET.ParseError as e:
            raise ValidationError(f"Could not parse effective POM: {e}")

    @staticmethod
    def _select_project(root: ET.Element) -> ET.Element | None:
        if _local_name(root.tag) == 'project':
            return root
        projects = [el for el in root.iter() if _local_name(el.tag) == 'project']
        return projects[-1] if projects else None

    def _qualify(self, path: str) -> str:
        """Prefix each step with the document namespace, keeping [n] predicates."""
        if self.project is None or not self.project.tag.startswith('{'):
            return path
        namespace = self.project.tag[1:].split('}', 1)[0]
        return '/'.join(f"{{{namespace}}}{step}" for step in path.split('/'))

    def values(self, path: str) -> list[str]:
        """
        Non-empty text values found at `path` below the project element,
        e.g. 'developers[1]/developer/email'.
        """
        if self.project is None:
            return []
        found = self.project.findall(self._qualify(path))
        values = []
        for element in found:
            text = ''.join(element.itertext()).strip()
            if text:
                values.append(text)
        return values

    def value(self, path: str) -> str:
        """All values at `path` joined by newlines; empty when nothing matches."""
        return '\n'.join(self.values(path))
