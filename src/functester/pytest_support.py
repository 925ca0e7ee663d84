"""pytest integration: one parametrized test per synthesized case.

Usage:
    harness = ReturnValueHarness(check_age, [AGE], {"0": "TOO_YOUNG"}, "OK")

    @parametrize_harness(harness)
    def test_check_age(case):
        case.execute()
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Any

import pytest

from functester.domain.plan import CaseGroup
from functester.harness.base import TestHarness

_ID_UNSAFE = re.compile(r"\s+")


def _case_id(description: str) -> str:
    return _ID_UNSAFE.sub("_", description.strip())


def case_params(source: TestHarness | CaseGroup) -> list[Any]:
    """Build one pytest.param per case, with ids derived from descriptions.

    Repeated descriptions get a numeric suffix so every id is unique.
    """
    group = source.run() if isinstance(source, TestHarness) else source

    seen: Counter[str] = Counter()
    totals = Counter(_case_id(case.description) for case in group)
    params = []
    for case in group:
        case_id = _case_id(case.description)
        if totals[case_id] > 1:
            seen[case_id] += 1
            case_id = f"{case_id}-{seen[case_id]}"
        params.append(pytest.param(case, id=f"{group.name}::{case_id}"))
    return params


def parametrize_harness(source: TestHarness | CaseGroup, argname: str = "case") -> Any:
    """Return a pytest.mark.parametrize decorator over the harness's cases."""
    return pytest.mark.parametrize(argname, case_params(source))


__all__ = ["case_params", "parametrize_harness"]
