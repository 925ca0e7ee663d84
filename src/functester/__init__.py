"""functester -- declarative parameter-validation test generator.

Describe a function's parameters once (valid and invalid examples plus
labelled value variants) and get the missing-argument, wrong-type,
correct-type and result cases synthesized as a case plan, runnable under
pytest or with the built-in runner.

Public API:
    ValueVariant, ParameterSpec, ResultCase, CallCase, CustomCase,
    ReturnValueHarness, VoidHarness, TestHarness, CaseRunner, observe,
    __version__

pytest integration lives in functester.pytest_support.
"""

from functester.domain.cases import CallCase, CustomCase, ResultCase, SupplementaryCase
from functester.domain.parameters import ParameterSpec, ValueVariant
from functester.domain.plan import CaseGroup, CaseKind, TestCase
from functester.domain.results import CaseResult, CaseStatus, RunSummary
from functester.exceptions import (
    ConstructionError,
    FuncTesterError,
    HarnessConfigError,
    HarnessError,
)
from functester.harness import ReturnValueHarness, TestHarness, VoidHarness
from functester.observation import Observation, observe
from functester.runner import CaseRunner

__version__: str = "0.3.0"

__all__ = [
    "CallCase",
    "CaseGroup",
    "CaseKind",
    "CaseResult",
    "CaseRunner",
    "CaseStatus",
    "ConstructionError",
    "CustomCase",
    "FuncTesterError",
    "HarnessConfigError",
    "HarnessError",
    "Observation",
    "ParameterSpec",
    "ResultCase",
    "ReturnValueHarness",
    "RunSummary",
    "SupplementaryCase",
    "TestCase",
    "TestHarness",
    "ValueVariant",
    "VoidHarness",
    "__version__",
    "observe",
]
