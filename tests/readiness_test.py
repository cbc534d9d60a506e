from unittest.mock import MagicMock

import pytest

from mvnready.core.config import MavenConfig
from mvnready.core.config import MvnReadyConfig
from mvnready.core.errors import BuildFailedError
from mvnready.core.errors import ValidationError
from mvnready.models.check import CheckCategory
from mvnready.services.maven_service import MavenService
from mvnready.services.readiness_service import ReadinessReporter
from mvnready.services.readiness_service import ReadinessService


EFFECTIVE_POM = """<project xmlns="http://maven.apache.org/POM/4.0.0">
  <licenses><license><url>https://www.apache.org/licenses/LICENSE-2.0</url></license></licenses>
  <developers><developer><email>opensource@telicent.io</email></developer></developers>
  <scm><url>https://github.com/telicent-oss/foo</url></scm>
  <distributionManagement>
    <repository><url>https://s01.oss.sonatype.org/service/local/staging/deploy/maven2/</url></repository>
  </distributionManagement>
</project>
"""

PROPERTIES = {
    'project.version': '1.0',
    'project.name': 'Foo',
    'project.description': 'The Foo library',
    'project.url': 'https://github.com/telicent-oss/foo',
    'project.packaging': 'jar',
    'project.artifactId': 'foo',
    'project.build.finalName': 'foo-1.0',
}

ARTIFACTS = [
    'foo-1.0.jar', 'foo-1.0-sources.jar', 'foo-1.0-javadoc.jar',
    'foo-1.0-bom.json', 'foo-1.0-bom.xml',
]


class RecordingReporter(ReadinessReporter):
    def __init__(self):
        self.events = []

    def on_build_start(self, project_dir):
        self.events.append('build')

    def on_pom_start(self, label):
        self.events.append(f'pom:{label}')

    def on_result(self, result):
        self.events.append(result)


def write_module(directory, artifacts=ARTIFACTS, unsigned=()):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / 'pom.xml').write_text('<project/>')
    target = directory / 'target'
    target.mkdir()
    for name in artifacts:
        (target / name).write_text('artifact')
        if name not in unsigned:
            (target / f'{name}.asc').write_text('signature')


def make_maven(properties_by_dir):
    properties_by_dir = {path.resolve(): props for path, props in properties_by_dir.items()}
    maven = MagicMock(spec=MavenService)
    maven.get_property.side_effect = lambda pom, name: properties_by_dir[pom.parent.resolve()].get(name, '')

    def generate(pom, output):
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(EFFECTIVE_POM)
        return output

    maven.generate_effective_pom.side_effect = generate
    return maven


@pytest.fixture
def make_service(tmp_path, monkeypatch):
    monkeypatch.delenv('CONTINUE_ON_ERROR', raising=False)

    def factory(properties_by_dir=None, continue_on_error=False):
        config = MvnReadyConfig(
            maven=MavenConfig(
                executable='mvn',
                effective_pom_path=tmp_path / 'scratch' / 'pom.xml',
                build_log_path=tmp_path / 'scratch' / 'maven.log',
            ),
            continue_on_error=continue_on_error,
        )
        maven = make_maven(properties_by_dir or {})
        tool_check = MagicMock()
        return ReadinessService(config, maven=maven, tool_check=tool_check)

    return factory


def test_missing_top_level_pom_never_builds(make_service, tmp_path):
    project = tmp_path / 'project'
    project.mkdir()
    service = make_service()

    with pytest.raises(ValidationError, match='no top level pom.xml'):
        service.run(project)
    service.maven.build.assert_not_called()


def test_invalid_directory(make_service, tmp_path):
    service = make_service()
    with pytest.raises(ValidationError, match='Invalid directory'):
        service.run(tmp_path / 'missing')
    service.maven.build.assert_not_called()


def test_no_directory(make_service):
    with pytest.raises(ValidationError):
        make_service().run(None)


def test_required_tools_checked_first(make_service, tmp_path):
    service = make_service()
    service.tool_check.side_effect = ValidationError('missing tool')

    with pytest.raises(ValidationError):
        service.run(tmp_path)
    service.tool_check.assert_called_once_with(['mvn'])
    service.maven.build.assert_not_called()


def test_build_failure_runs_no_checks(make_service, tmp_path):
    project = tmp_path / 'project'
    write_module(project)
    service = make_service({project: PROPERTIES})
    service.maven.build.side_effect = BuildFailedError('[ERROR] BUILD FAILURE')

    with pytest.raises(BuildFailedError):
        service.run(project)
    service.maven.get_property.assert_not_called()
    service.maven.generate_effective_pom.assert_not_called()


def test_release_ready_project(make_service, tmp_path):
    project = tmp_path / 'project'
    write_module(project)
    service = make_service({project: PROPERTIES})
    reporter = RecordingReporter()

    report = service.run(project, reporter=reporter)

    assert report.passed
    assert report.errors == 0
    assert report.poms == ['./pom.xml']
    assert not report.stopped_early
    assert reporter.events[:2] == ['build', 'pom:./pom.xml']
    assert len(reporter.events) == 2 + len(report.results)


def test_fail_fast_stops_at_first_failure(make_service, tmp_path):
    project = tmp_path / 'project'
    write_module(project)
    properties = {**PROPERTIES, 'project.description': ''}
    service = make_service({project: properties})

    report = service.run(project)

    assert not report.passed
    assert report.errors == 1
    assert report.stopped_early
    assert [r.name for r in report.results] == [
        'project.version', 'project.name', 'project.description',
    ]
    service.maven.generate_effective_pom.assert_not_called()


def test_continue_on_error_checks_all_metadata(make_service, tmp_path):
    project = tmp_path / 'project'
    write_module(project)
    properties = {
        k: v for k, v in PROPERTIES.items()
        if k not in {'project.name', 'project.description', 'project.url'}
    }
    service = make_service({project: properties}, continue_on_error=True)

    report = service.run(project)

    metadata_failures = [r.name for r in report.failures if r.category == CheckCategory.METADATA]
    assert metadata_failures == ['project.name', 'project.description', 'project.url']


def test_continue_on_error_counts_every_failure(make_service, tmp_path):
    project = tmp_path / 'project'
    write_module(project, unsigned=['foo-1.0-javadoc.jar'])
    properties = {**PROPERTIES, 'project.description': '', 'project.url': ' '}
    service = make_service({project: properties}, continue_on_error=True)

    report = service.run(project)

    assert report.errors == 3
    assert not report.passed
    assert not report.stopped_early
    assert {r.name for r in report.failures} == {
        'project.description', 'project.url', 'foo-1.0-javadoc.jar',
    }


def test_multi_module_project(make_service, tmp_path):
    project = tmp_path / 'project'
    write_module(project, artifacts=['parent-1.0-bom.json', 'parent-1.0-bom.xml'])
    write_module(project / 'core')
    parent_properties = {
        **PROPERTIES, 'project.packaging': 'pom',
        'project.artifactId': 'parent', 'project.build.finalName': 'parent-1.0',
    }
    service = make_service({project: parent_properties, project / 'core': PROPERTIES})

    report = service.run(project)

    assert report.passed
    assert sorted(report.poms) == ['./core/pom.xml', './pom.xml']
    assert report.summary_by_pom()['./pom.xml'] == (14, 0)
    assert report.summary_by_pom()['./core/pom.xml'] == (20, 0)
