from collections.abc import Iterator
from pathlib import Path

import structlog

from mvnready.core.config import ForbiddenReference
from mvnready.core.config import PolicyConfig
from mvnready.core.errors import MavenCommandError
from mvnready.core.errors import ValidationError
from mvnready.models.check import CheckCategory
from mvnready.models.check import CheckResult
from mvnready.models.pom import EffectivePom
from mvnready.models.pom import PomDescriptor
from mvnready.services.maven_service import MavenService

logger = structlog.get_logger('check_service')

# (query path below <project>, description, policy attribute holding the expected value)
SECTION_CHECKS: list[tuple[str, str, str | None]] = [
    ('licenses[1]/license/url', '<licenses> section', None),
    ('developers[1]/developer/email', '<developers> section', 'expected_developer_email'),
    ('scm/url', '<scm> section', None),
    ('distributionManagement/repository/url', '<distributionManagement> section', 'expected_distribution_url'),
]


def expected_artifacts(
    packaging: str,
    artifact_id: str,
    version: str,
    final_name: str,
    aggregator_packaging: str = 'pom',
) -> list[tuple[str, str]]:
    """
    File names (and descriptions) a release build must leave in the build
    directory. Aggregator POMs only produce SBOMs.
    """
    artifacts = []
    if packaging != aggregator_packaging:
        artifacts += [
            (f"{final_name}.jar", 'JAR File'),
            (f"{final_name}-sources.jar", 'Sources JAR'),
            (f"{final_name}-javadoc.jar", 'Javadoc JAR'),
        ]
    artifacts += [
        (f"{artifact_id}-{version}-bom.json", 'JSON SBOM'),
        (f"{artifact_id}-{version}-bom.xml", 'XML SBOM'),
    ]
    return artifacts


def signable_artifacts(build_dir: Path, policy: PolicyConfig) -> list[Path]:
    """
    Regular files directly inside `build_dir` that must carry a detached
    signature. Signatures themselves, diagnostic outputs and original-*
    pre-repackage artifacts are excluded.
    """
    if not build_dir.is_dir():
        return []

    artifacts = []
    for path in sorted(build_dir.iterdir()):
        if not path.is_file() or path.name.endswith(policy.signature_suffix):
            continue
        extension = path.name.rsplit('.', 1)[-1]
        if extension in policy.unsigned_extensions:
            continue
        if path.name.startswith(policy.unsigned_prefix):
            continue
        artifacts.append(path)
    return artifacts


class PomChecker:
    """Runs the release-readiness checks for a single POM file."""

    def __init__(self, maven: MavenService, policy: PolicyConfig, effective_pom_path: Path):
        self.maven = maven
        self.policy = policy
        self.effective_pom_path = effective_pom_path

    # -- Basic metadata --

    def check_property(self, pom: PomDescriptor, label: str, name: str) -> CheckResult:
        try:
            value = self.maven.get_property(pom.path, name)
        except MavenCommandError as e:
            return CheckResult.fail(
                label, CheckCategory.METADATA, name,
                f"POM file {label} could not evaluate Maven Property {name}: {e}",
            )

        if not value.strip():
            return CheckResult.fail(
                label, CheckCategory.METADATA, name,
                f"POM file {label} does not have the required Maven Property {name} set",
            )
        return CheckResult.ok(
            label, CheckCategory.METADATA, name,
            f"Verified POM file {label} has required Maven Property {name} set as: {value}",
        )

    # -- Effective POM sections --

    def load_effective_pom(self, pom: PomDescriptor) -> EffectivePom:
        output = self.maven.generate_effective_pom(pom.path, self.effective_pom_path)
        return EffectivePom.parse(output)

    def check_section(
        self,
        label: str,
        effective: EffectivePom,
        path: str,
        description: str,
        expected: str | None = None,
    ) -> CheckResult:
        value = effective.value(path)
        if not value:
            return CheckResult.fail(
                label, CheckCategory.SECTION, description,
                f"POM file {label} does not have {description}",
            )
        if expected and value != expected:
            return CheckResult.fail(
                label, CheckCategory.SECTION, description,
                f"POM file {label} does not have the expected value for {description}, "
                f"expected {expected} but found {value}",
            )
        return CheckResult.ok(
            label, CheckCategory.SECTION, description,
            f"Verified POM file {label} has {description}",
        )

    # -- Forbidden references --

    def check_forbidden_reference(self, pom: PomDescriptor, label: str, reference: ForbiddenReference) -> CheckResult:
        if reference.found_in(pom.text):
            return CheckResult.fail(
                label, CheckCategory.FORBIDDEN_REFERENCE, reference.token,
                f"POM file {label} still contains a reference to {reference.description}",
            )
        return CheckResult.ok(
            label, CheckCategory.FORBIDDEN_REFERENCE, reference.token,
            f"POM file {label} does not reference {reference.description}",
        )

    # -- Build artifacts --

    def check_artifact(self, pom: PomDescriptor, label: str, file_name: str, description: str) -> CheckResult:
        if not (pom.build_dir / file_name).is_file():
            return CheckResult.fail(
                label, CheckCategory.ARTIFACT, file_name,
                f"POM file {label} does not produce a {description} ({file_name}) "
                f"in its {pom.build_dir_name}/ directory",
            )
        return CheckResult.ok(
            label, CheckCategory.ARTIFACT, file_name,
            f"Verified POM file {label} produces a {description} ({file_name})",
        )

    def check_artifacts(self, pom: PomDescriptor, label: str) -> Iterator[CheckResult]:
        try:
            packaging = self.maven.get_property(pom.path, 'project.packaging')
            artifact_id = self.maven.get_property(pom.path, 'project.artifactId')
            version = self.maven.get_property(pom.path, 'project.version')
            final_name = self.maven.get_property(pom.path, 'project.build.finalName')
        except MavenCommandError as e:
            yield CheckResult.fail(
                label, CheckCategory.ARTIFACT, 'coordinates',
                f"POM file {label} could not have its artifact coordinates resolved: {e}",
            )
            return

        logger.info(
            'Resolved artifact coordinates', pom=label, packaging=packaging,
            artifact_id=artifact_id, version=version, final_name=final_name,
        )
        for file_name, description in expected_artifacts(
            packaging, artifact_id, version, final_name, self.policy.aggregator_packaging,
        ):
            yield self.check_artifact(pom, label, file_name, description)

    # -- Signatures --

    def check_signature(self, label: str, artifact: Path) -> CheckResult:
        signature = artifact.with_name(artifact.name + self.policy.signature_suffix)
        if not signature.is_file():
            return CheckResult.fail(
                label, CheckCategory.SIGNATURE, artifact.name,
                f"POM file {label} produces artifact {artifact.name} that does not "
                'have a corresponding digital signature file',
            )
        return CheckResult.ok(
            label, CheckCategory.SIGNATURE, artifact.name,
            f"Verified POM file {label} generates digital signature for artifact {artifact.name}",
        )

    def check_signatures(self, pom: PomDescriptor, label: str) -> Iterator[CheckResult]:
        for artifact in signable_artifacts(pom.build_dir, self.policy):
            yield self.check_signature(label, artifact)

    # -- Full sequence --

    def check_pom(self, pom: PomDescriptor, label: str) -> Iterator[CheckResult]:
        """
        Yield every check result for `pom` in order. Results are produced
        lazily so a caller that stops iterating runs no further Maven goals.
        """
        for name in self.policy.required_properties:
            yield self.check_property(pom, label, name)

        try:
            effective = self.load_effective_pom(pom)
        except (MavenCommandError, ValidationError) as e:
            logger.debug('Effective POM generation failed', pom=label, error=str(e))
            yield CheckResult.fail(
                label, CheckCategory.EFFECTIVE_POM, 'effective-pom',
                f"POM file {label} could not have an effective POM file generated for it",
            )
            return

        for path, description, expected_attr in SECTION_CHECKS:
            expected = getattr(self.policy, expected_attr) if expected_attr else None
            yield self.check_section(label, effective, path, description, expected)

        for reference in self.policy.forbidden_references:
            yield self.check_forbidden_reference(pom, label, reference)

        yield from self.check_artifacts(pom, label)
        yield from self.check_signatures(pom, label)
