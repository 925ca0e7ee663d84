"""Tests for CaseRunner and RunSummary."""

from __future__ import annotations

from functester import (
    CaseGroup,
    CaseKind,
    CaseResult,
    CaseRunner,
    CaseStatus,
    CustomCase,
    ReturnValueHarness,
    RunSummary,
    TestCase,
    VoidHarness,
)
from functester.config import RunnerConfig
from tests.fakes import AGE, check_age, lenient_check_age


def _fail():
    raise AssertionError("nope")


def _explode():
    raise RuntimeError("boom")


def _group(*bodies) -> CaseGroup:
    group = CaseGroup("sample")
    for number, body in enumerate(bodies):
        group.add(TestCase(f"case {number}", CaseKind.CUSTOM, body))
    return group


class TestRunCase:
    def test_passed(self):
        result = CaseRunner().run_case(TestCase("ok", CaseKind.CUSTOM, lambda: None))
        assert result.status == CaseStatus.PASSED
        assert result.passed
        assert result.duration_ms >= 0

    def test_assertion_is_failure(self):
        result = CaseRunner().run_case(TestCase("bad", CaseKind.CUSTOM, _fail))
        assert result.status == CaseStatus.FAILED
        assert result.message == "nope"
        assert isinstance(result.error, AssertionError)

    def test_other_exception_is_error(self):
        result = CaseRunner().run_case(TestCase("boom", CaseKind.CUSTOM, _explode))
        assert result.status == CaseStatus.ERROR
        assert result.message == "RuntimeError: boom"
        assert result.failed


class TestRun:
    def test_failures_do_not_abort_siblings(self):
        summary = CaseRunner().run(_group(_fail, _explode, lambda: None))
        assert summary.total_cases == 3
        assert (summary.passed, summary.failed, summary.errors) == (1, 1, 1)
        assert not summary.all_passed

    def test_stop_on_failure(self):
        runner = CaseRunner(RunnerConfig(stop_on_failure=True))
        summary = runner.run(_group(lambda: None, _fail, lambda: None))
        assert summary.total_cases == 2
        assert summary.failed == 1

    def test_order_preserved(self):
        order = []
        group = _group(lambda: order.append(0), lambda: order.append(1), lambda: order.append(2))
        CaseRunner().run(group)
        assert order == [0, 1, 2]

    def test_run_harness(self):
        harness = ReturnValueHarness(check_age, [AGE], {"0": "TOO_YOUNG_OR_INVALID"}, "OK")
        summary = CaseRunner().run_harness(harness)
        assert summary.group == "check_age"
        assert summary.all_passed
        assert summary.total_cases == 5

    def test_run_harness_reports_missing_validation(self):
        summary = CaseRunner().run_harness(VoidHarness(lenient_check_age, [AGE]))
        (failure,) = summary.failures
        assert failure.kind == CaseKind.WRONG_TYPE

    def test_run_all(self):
        harnesses = [
            VoidHarness(check_age, [AGE]),
            VoidHarness(check_age, [AGE], supplementary_cases=[CustomCase("fails", _fail)]),
        ]
        summaries = CaseRunner().run_all(harnesses)
        assert [s.all_passed for s in summaries] == [True, False]


class TestRunSummary:
    def test_empty_success_rate(self):
        assert RunSummary(group="empty").success_rate == 100.0

    def test_counts(self):
        summary = RunSummary(group="g")
        summary.add_result(CaseResult("a", CaseKind.CUSTOM, CaseStatus.PASSED, duration_ms=1.0))
        summary.add_result(CaseResult("b", CaseKind.CUSTOM, CaseStatus.FAILED, duration_ms=2.0))
        assert summary.total_cases == 2
        assert summary.success_rate == 50.0
        assert summary.duration_ms == 3.0
        assert [r.description for r in summary.failures] == ["b"]
