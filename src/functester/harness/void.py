"""Harness for functions validated only through side effects."""

from __future__ import annotations

from functester.harness.base import TestHarness


class VoidHarness(TestHarness):
    """Parameter-validation matrix plus supplementary cases only.

    The function's return value is not asserted; use CallCase and CustomCase
    to check what it does.
    """

    def test_suite(self) -> None:
        self.run_supplementary_cases()
