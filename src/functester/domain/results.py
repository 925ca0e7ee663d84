"""Outcome records produced when a case plan is executed."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from functester.domain.plan import CaseKind


class CaseStatus(Enum):
    """Status of an executed case."""

    PASSED = auto()
    FAILED = auto()  # AssertionError raised by the case body
    ERROR = auto()  # Any other exception


@dataclass
class CaseResult:
    """Result of executing one TestCase."""

    description: str
    kind: CaseKind
    status: CaseStatus
    message: str = ""
    error: BaseException | None = None
    duration_ms: float = 0.0

    @property
    def passed(self) -> bool:
        return self.status == CaseStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status in (CaseStatus.FAILED, CaseStatus.ERROR)


@dataclass
class RunSummary:
    """Summary of one executed CaseGroup."""

    group: str
    total_cases: int = 0
    passed: int = 0
    failed: int = 0
    errors: int = 0
    duration_ms: float = 0.0
    results: list[CaseResult] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        if self.total_cases == 0:
            return 100.0
        return (self.passed / self.total_cases) * 100

    @property
    def all_passed(self) -> bool:
        return self.failed == 0 and self.errors == 0

    @property
    def failures(self) -> list[CaseResult]:
        return [r for r in self.results if r.failed]

    def add_result(self, result: CaseResult) -> None:
        self.results.append(result)
        self.total_cases += 1
        self.duration_ms += result.duration_ms

        match result.status:
            case CaseStatus.PASSED:
                self.passed += 1
            case CaseStatus.FAILED:
                self.failed += 1
            case CaseStatus.ERROR:
                self.errors += 1
