"""Domain models: parameter specs, supplementary cases, case plans and results."""

from functester.domain.cases import CallCase, CustomCase, ResultCase, SupplementaryCase
from functester.domain.parameters import (
    ParameterSpec,
    ValueVariant,
    combination_key,
    invalid_examples,
    parse_combination_key,
    valid_examples,
)
from functester.domain.plan import CaseGroup, CaseKind, TestCase
from functester.domain.results import CaseResult, CaseStatus, RunSummary

__all__ = [
    "CallCase",
    "CaseGroup",
    "CaseKind",
    "CaseResult",
    "CaseStatus",
    "CustomCase",
    "ParameterSpec",
    "ResultCase",
    "RunSummary",
    "SupplementaryCase",
    "TestCase",
    "ValueVariant",
    "combination_key",
    "invalid_examples",
    "parse_combination_key",
    "valid_examples",
]
