"""Sequential executor for case plans.

Runs each TestCase of a CaseGroup in registration order, one at a time.
Every exception raised by a case is contained in that case's CaseResult;
sibling cases always run unless stop_on_failure is set.
"""

from __future__ import annotations

import time
from collections.abc import Iterable

from loguru import logger

from functester.config.models import RunnerConfig
from functester.domain.plan import CaseGroup, TestCase
from functester.domain.results import CaseResult, CaseStatus, RunSummary
from functester.harness.base import TestHarness


class CaseRunner:
    """Executes case plans and collects RunSummaries."""

    def __init__(self, config: RunnerConfig | None = None) -> None:
        self.config = config or RunnerConfig()

    def run_harness(self, harness: TestHarness) -> RunSummary:
        """Build the harness's plan and execute it."""
        return self.run(harness.run())

    def run_all(self, harnesses: Iterable[TestHarness]) -> list[RunSummary]:
        return [self.run_harness(harness) for harness in harnesses]

    def run(self, group: CaseGroup) -> RunSummary:
        """Execute every case of group in order.

        Args:
            group: The case plan to execute.

        Returns:
            RunSummary with one CaseResult per executed case.
        """
        summary = RunSummary(group=group.name)
        logger.info("Running {} ({} cases)", group.name, len(group))

        for case in group:
            result = self.run_case(case)
            summary.add_result(result)

            if result.failed and self.config.stop_on_failure:
                logger.warning("Stopping {} after first failure", group.name)
                break

        log = logger.success if summary.all_passed else logger.error
        log(
            "{}: {}/{} passed ({:.1f}ms)",
            group.name,
            summary.passed,
            summary.total_cases,
            summary.duration_ms,
        )
        return summary

    def run_case(self, case: TestCase) -> CaseResult:
        """Execute a single case, converting any exception into a result."""
        start = time.perf_counter()

        try:
            case.execute()
        except AssertionError as e:
            result = CaseResult(
                description=case.description,
                kind=case.kind,
                status=CaseStatus.FAILED,
                message=str(e) or "Assertion failed",
                error=e,
            )
        except Exception as e:
            result = CaseResult(
                description=case.description,
                kind=case.kind,
                status=CaseStatus.ERROR,
                message=f"{type(e).__name__}: {e}",
                error=e,
            )
        else:
            result = CaseResult(
                description=case.description,
                kind=case.kind,
                status=CaseStatus.PASSED,
            )

        result.duration_ms = (time.perf_counter() - start) * 1000

        if result.passed:
            logger.debug("PASS {}", case.description)
        else:
            logger.warning("{} {}: {}", result.status.name, case.description, result.message)
        return result
