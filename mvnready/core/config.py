"""Configuration management for mvnready."""
import os
import tempfile
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path


def _env_flag(name: str) -> bool:
    """Any non-empty value switches the flag on."""
    return bool(os.getenv(name))


@dataclass
class ForbiddenReference:
    """A literal token that must not appear in a raw POM file."""
    token: str
    description: str
    case_sensitive: bool = True

    def found_in(self, text: str) -> bool:
        if self.case_sensitive:
            return self.token in text
        return self.token.lower() in text.lower()


def _default_forbidden_references() -> list[ForbiddenReference]:
    return [
        ForbiddenReference(
            token='telicent-098669589541.d.codeartifact',
            description='Telicent AWS CodeArtifact',
        ),
        ForbiddenReference(
            token='/telicent-io/',
            description='the private telicent-io GitHub organisation',
            case_sensitive=False,
        ),
    ]


@dataclass
class MavenConfig:
    """How Maven is invoked and where its scratch files go."""
    executable: str = field(
        default_factory=lambda: os.getenv('MVNREADY_MAVEN', 'mvn'),
    )
    effective_pom_path: Path = field(
        default_factory=lambda: Path(
            os.getenv(
                'MVNREADY_EFFECTIVE_POM',
                str(Path(tempfile.gettempdir()) / 'pom.xml'),
            ),
        ),
    )
    build_log_path: Path = field(
        default_factory=lambda: Path(
            os.getenv(
                'MVNREADY_BUILD_LOG',
                str(Path(tempfile.gettempdir()) / 'maven.log'),
            ),
        ),
    )


@dataclass
class PolicyConfig:
    """What a release-ready project has to look like."""
    expected_developer_email: str = 'opensource@telicent.io'
    expected_distribution_url: str = 'https://s01.oss.sonatype.org/service/local/staging/deploy/maven2/'
    forbidden_references: list[ForbiddenReference] = field(
        default_factory=_default_forbidden_references,
    )
    required_properties: tuple[str, ...] = (
        'project.version',
        'project.name',
        'project.description',
        'project.url',
    )
    aggregator_packaging: str = 'pom'
    build_dir_name: str = 'target'
    signature_suffix: str = '.asc'
    unsigned_extensions: tuple[str, ...] = ('txt', 'log')
    unsigned_prefix: str = 'original'


@dataclass
class MvnReadyConfig:
    maven: MavenConfig = field(default_factory=MavenConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    continue_on_error: bool = field(
        default_factory=lambda: _env_flag('CONTINUE_ON_ERROR'),
    )

    @property
    def required_tools(self) -> list[str]:
        return [self.maven.executable]

    @classmethod
    def load(cls) -> 'MvnReadyConfig':
        return cls()


_config: MvnReadyConfig | None = None


def get_config() -> MvnReadyConfig:
    global _config
    if _config is None:
        _config = MvnReadyConfig.load()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config
    _config = None
