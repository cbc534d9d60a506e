from collections import Counter
from enum import Enum

from pydantic import BaseModel
from pydantic import Field


class CheckStatus(str, Enum):
    PASS = 'pass'
    FAIL = 'fail'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return self.value


class CheckCategory(str, Enum):
    METADATA = 'metadata'
    EFFECTIVE_POM = 'effective-pom'
    SECTION = 'section'
    FORBIDDEN_REFERENCE = 'forbidden-reference'
    ARTIFACT = 'artifact'
    SIGNATURE = 'signature'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return self.value


class CheckResult(BaseModel):
    """Outcome of one compliance check against one POM."""
    pom: str
    category: CheckCategory
    name: str
    status: CheckStatus
    message: str

    @classmethod
    def ok(cls, pom: str, category: CheckCategory, name: str, message: str) -> 'CheckResult':
        return cls(pom=pom, category=category, name=name, status=CheckStatus.PASS, message=message)

    @classmethod
    def fail(cls, pom: str, category: CheckCategory, name: str, message: str) -> 'CheckResult':
        return cls(pom=pom, category=category, name=name, status=CheckStatus.FAIL, message=message)

    @property
    def passed(self) -> bool:
        return self.status is CheckStatus.PASS


class CheckReport(BaseModel):
    """Every result of a run, in the order the checks were executed."""
    project_dir: str
    continue_on_error: bool = False
    poms: list[str] = Field(default_factory=list)
    results: list[CheckResult] = Field(default_factory=list)
    stopped_early: bool = False

    def add(self, result: CheckResult) -> None:
        self.results.append(result)

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if not r.passed)

    @property
    def passed(self) -> bool:
        return self.errors == 0

    @property
    def failures(self) -> list[CheckResult]:
        return [r for r in self.results if not r.passed]

    def summary_by_pom(self) -> dict[str, tuple[int, int]]:
        """Map each POM to (passed, failed) counts."""
        passed: Counter[str] = Counter()
        failed: Counter[str] = Counter()
        for result in self.results:
            if result.passed:
                passed[result.pom] += 1
            else:
                failed[result.pom] += 1
        return {pom: (passed[pom], failed[pom]) for pom in self.poms}
