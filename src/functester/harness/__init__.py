"""Test harnesses turning parameter specs into case plans."""

from functester.harness.base import TestHarness
from functester.harness.return_value import ReturnValueHarness
from functester.harness.void import VoidHarness

__all__ = ["ReturnValueHarness", "TestHarness", "VoidHarness"]
