"""Harness for functions that return a value worth asserting."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from loguru import logger

from functester.domain.cases import SupplementaryCase
from functester.domain.parameters import (
    ParameterSpec,
    ValueVariant,
    combination_key,
    parse_combination_key,
)
from functester.domain.plan import CaseKind
from functester.exceptions import HarnessConfigError
from functester.harness.base import TestHarness


class ReturnValueHarness(TestHarness):
    """Asserts a return value for every ValueVariant and wrong combination.

    For each parameter i and each of its variants, the function is called
    with the valid examples except index i, which gets the variant's value.
    A valid variant must produce correct_result; an invalid one must produce
    wrong_combination_results[str(i)]. Keys naming several indices ("0,1")
    add one case where each named parameter gets its first invalid variant.

    Inconsistent mappings are rejected at construction with
    HarnessConfigError: malformed, duplicate or out-of-range keys, or a
    multi-index key naming a parameter without any invalid variant. A
    parameter with invalid variants but no single-index key expects None
    for them (a warning is logged).

    Args:
        function_under_test: The function (or method) to test.
        parameter_specs: One ParameterSpec per positional parameter, in order.
        wrong_combination_results: Expected result per combination key.
        correct_result: Expected result when every value is valid.
        receiver: Object the function is invoked on.
        supplementary_cases: Hand-written cases run after the result checks.
        type_error: Exception kind expected for missing or wrong-typed
            arguments.
    """

    def __init__(
        self,
        function_under_test: Callable[..., Any],
        parameter_specs: Sequence[ParameterSpec],
        wrong_combination_results: Mapping[str, Any],
        correct_result: Any,
        receiver: Any = None,
        supplementary_cases: Sequence[SupplementaryCase] = (),
        *,
        type_error: type[BaseException] = TypeError,
    ) -> None:
        super().__init__(
            function_under_test,
            parameter_specs,
            receiver,
            supplementary_cases,
            type_error=type_error,
        )
        self.correct_result = correct_result
        self.wrong_combination_results: dict[str, Any] = {}
        # Multi-index key -> (index, first invalid variant) per named parameter
        self.wrong_combinations: dict[str, tuple[tuple[int, ValueVariant], ...]] = {}
        self._normalise_results(wrong_combination_results)

    def _normalise_results(self, results: Mapping[str, Any]) -> None:
        for key, expected in results.items():
            canonical = combination_key(parse_combination_key(key, self.parameter_count))
            indices = parse_combination_key(canonical)
            if canonical in self.wrong_combination_results:
                raise HarnessConfigError(
                    f"Combination key {key!r} duplicates {canonical!r} in wrong_combination_results"
                )
            if len(indices) > 1:
                self.wrong_combinations[canonical] = tuple(
                    (index, self._first_invalid_variant(key, index)) for index in indices
                )
            self.wrong_combination_results[canonical] = expected

        for index, spec in enumerate(self.parameter_specs):
            if spec.invalid_variants and str(index) not in self.wrong_combination_results:
                logger.warning(
                    "Parameter {!r} has invalid variants but no {!r} entry in "
                    "wrong_combination_results; expecting None for them",
                    spec.name,
                    str(index),
                )

    def _first_invalid_variant(self, key: str, index: int) -> ValueVariant:
        spec = self.parameter_specs[index]
        variant = spec.first_invalid_variant()
        if variant is None:
            raise HarnessConfigError(
                f"Combination {key!r} needs an invalid variant for "
                f"parameter {spec.name!r}, but it has none"
            )
        return variant

    @property
    def combination_keys(self) -> list[str]:
        """Keys naming more than one parameter, in declaration order."""
        return list(self.wrong_combinations)

    def test_suite(self) -> None:
        self.test_value_variants()
        self.test_wrong_combinations()
        self.run_supplementary_cases()

    def test_value_variants(self) -> None:
        """One case per ValueVariant, all other parameters valid."""
        for i, spec in enumerate(self.parameter_specs):
            for variant in spec.variants:
                parameters = list(self.correct_type_parameters)
                parameters[i] = variant.value

                expected = (
                    self.correct_result
                    if variant.is_valid
                    else self.wrong_combination_results.get(str(i))
                )
                self.run_result_case(
                    f"{expected} if the {spec.name} {variant.description}",
                    parameters,
                    expected,
                    kind=CaseKind.VALUE_VARIANT,
                )

    def test_wrong_combinations(self) -> None:
        """One case per multi-index key, each named parameter invalid at once."""
        for key, replacements in self.wrong_combinations.items():
            parameters = list(self.correct_type_parameters)
            names = []
            for index, variant in replacements:
                parameters[index] = variant.value
                names.append(self.parameter_specs[index].name)

            expected = self.wrong_combination_results[key]
            logger.debug("Wrong combination {} -> {!r}", key, expected)
            self.run_result_case(
                f"{expected} if the {' '.join(names)} are wrong",
                parameters,
                expected,
                kind=CaseKind.WRONG_COMBINATION,
            )
