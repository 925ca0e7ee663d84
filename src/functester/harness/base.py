"""Abstract test harness: parameter-validation matrix and supplementary cases.

A harness turns a function under test plus its ParameterSpecs into a
CaseGroup:

1. the parameter-validation matrix
   - no arguments                      -> must raise the type-violation error
   - each parameter's invalid example  -> must raise it (N cases)
   - each prefix of 1..N-1 arguments   -> must raise it (N-1 cases)
   - all valid examples                -> must not raise it
2. the subclass's test_suite() cases, which usually end with the
   supplementary cases.

The harness only builds the plan; executing it is the job of a runner.
"""

from __future__ import annotations

import functools
import inspect
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from loguru import logger

from functester.assertions import assert_does_not_fail, assert_equal, assert_fails
from functester.domain.cases import CallCase, CustomCase, ResultCase, SupplementaryCase
from functester.domain.parameters import ParameterSpec, invalid_examples, valid_examples
from functester.domain.plan import CaseGroup, CaseKind, TestCase
from functester.exceptions import ConstructionError, HarnessConfigError, HarnessError
from functester.observation import Observation, find_attribute_name, observe

_SUPPLEMENTARY_TYPES = (ResultCase, CallCase, CustomCase)


def _bind(function: Callable[..., Any], receiver: Any) -> Callable[..., Any]:
    """Bind function to receiver when it is a plain method of the receiver's type."""
    if receiver is None or inspect.ismethod(function):
        return function
    name = getattr(function, "__name__", None)
    if name is None:
        return function
    declared = inspect.getattr_static(type(receiver), name, None)
    if declared is function:
        return function.__get__(receiver, type(receiver))
    return function


class TestHarness(ABC):
    """Synthesizes parameter-validation cases for a function under test.

    Subclasses implement test_suite() to register result checks. Instantiating
    TestHarness itself, or a subclass without test_suite(), raises
    ConstructionError.

    Args:
        function_under_test: The function (or method) to test.
        parameter_specs: One ParameterSpec per positional parameter, in order.
        receiver: Object the function is invoked on. A plain method of the
            receiver's class is bound to it; functions and bound methods are
            called as-is.
        supplementary_cases: Hand-written cases run after the result checks.
        type_error: Exception kind expected for missing or wrong-typed
            arguments.
    """

    __test__ = False  # not a pytest test class

    def __new__(cls, *args: Any, **kwargs: Any) -> TestHarness:
        if cls is TestHarness:
            raise ConstructionError("Cannot construct TestHarness instances directly")
        if getattr(cls, "__abstractmethods__", None):
            missing = ", ".join(sorted(cls.__abstractmethods__))
            raise ConstructionError(f"{cls.__name__} must override {missing}")
        return super().__new__(cls)

    def __init__(
        self,
        function_under_test: Callable[..., Any],
        parameter_specs: Sequence[ParameterSpec],
        receiver: Any = None,
        supplementary_cases: Sequence[SupplementaryCase] = (),
        *,
        type_error: type[BaseException] = TypeError,
    ) -> None:
        self.function_under_test = function_under_test
        self.parameter_specs = tuple(parameter_specs)
        self.receiver = receiver
        self.supplementary_cases = tuple(supplementary_cases)
        self.type_error = type_error
        self.correct_type_parameters = valid_examples(self.parameter_specs)
        self.wrong_type_parameters = invalid_examples(self.parameter_specs)
        self._group: CaseGroup | None = None

        self._check_supplementary_cases()

    def _check_supplementary_cases(self) -> None:
        for case in self.supplementary_cases:
            if not isinstance(case, _SUPPLEMENTARY_TYPES):
                raise HarnessConfigError(f"Unsupported supplementary case: {case!r}")
            if isinstance(case, CallCase):
                # Raises HarnessConfigError if the callable can't be observed
                find_attribute_name(case.expected_receiver, case.expected_callable)

    @property
    def name(self) -> str:
        """Group name: the function's qualified name."""
        function = self.function_under_test
        return getattr(function, "__qualname__", None) or getattr(
            function, "__name__", repr(function)
        )

    @property
    def parameter_count(self) -> int:
        return len(self.parameter_specs)

    def invoke(self, args: Sequence[Any]) -> Any:
        """Call the function under test with args on the receiver."""
        return _bind(self.function_under_test, self.receiver)(*args)

    # -------------------------------------------------------------------------
    # Plan construction
    # -------------------------------------------------------------------------

    def run(self) -> CaseGroup:
        """Build the case plan: parameter-validation matrix, then test_suite()."""
        self._group = CaseGroup(self.name)
        try:
            self.test_type_params()
            self.test_suite()
            group = self._group
        finally:
            self._group = None

        logger.debug(
            "Synthesized {} case(s) for {} ({} in the parameter matrix)",
            len(group),
            group.name,
            len(group.matrix_cases),
        )
        return group

    @abstractmethod
    def test_suite(self) -> None:
        """Register the subclass-specific cases."""
        ...

    def register_case(
        self, description: str, body: Callable[[], Any], kind: CaseKind = CaseKind.CUSTOM
    ) -> None:
        """Register a synchronous case in the plan being built."""
        self._current_group().add(TestCase(description, kind, body))

    def register_async_case(
        self, description: str, body: Callable[[], Any], kind: CaseKind = CaseKind.CUSTOM
    ) -> None:
        """Register a case whose body returns an awaitable."""
        self._current_group().add(TestCase(description, kind, body, is_async=True))

    def _current_group(self) -> CaseGroup:
        if self._group is None:
            raise HarnessError("Cases can only be registered while run() builds the plan")
        return self._group

    # -------------------------------------------------------------------------
    # Parameter-validation matrix
    # -------------------------------------------------------------------------

    def test_type_params(self) -> None:
        """Register the parameter-validation matrix."""
        self.test_no_parameter_error()

        for i, spec in enumerate(self.parameter_specs):
            parameters = list(self.correct_type_parameters)
            parameters[i] = self.wrong_type_parameters[i]
            self.test_wrong_parameters_error(
                parameters,
                f"should raise {self.type_error.__name__} if the {spec.name} is of the wrong type",
                CaseKind.WRONG_TYPE,
            )

        total = len(self.correct_type_parameters)
        for count in range(1, total):
            self.test_wrong_parameters_error(
                self.correct_type_parameters[:count],
                f"should raise {self.type_error.__name__} if only {count} of {total} "
                "parameters are given",
                CaseKind.MISSING_ARGUMENTS,
            )

        self.test_correct_parameters_type(self.correct_type_parameters)

    def test_no_parameter_error(self) -> None:
        # Registered for zero-parameter functions too
        self.register_case(
            f"should raise {self.type_error.__name__} if there are no parameters",
            functools.partial(self._expect_type_error, ()),
            CaseKind.NO_ARGUMENTS,
        )

    def test_wrong_parameters_error(
        self, parameters: Sequence[Any], description: str, kind: CaseKind
    ) -> None:
        self.register_case(
            description, functools.partial(self._expect_type_error, tuple(parameters)), kind
        )

    def test_correct_parameters_type(self, parameters: Sequence[Any]) -> None:
        arguments = tuple(parameters)
        self.register_case(
            f"should not raise {self.type_error.__name__} if all parameters are correct",
            lambda: assert_does_not_fail(lambda: self.invoke(arguments), self.type_error),
            CaseKind.CORRECT_TYPES,
        )

    def _expect_type_error(self, arguments: tuple[Any, ...]) -> None:
        assert_fails(lambda: self.invoke(arguments), self.type_error)

    # -------------------------------------------------------------------------
    # Result and supplementary cases
    # -------------------------------------------------------------------------

    def run_result_case(
        self,
        description: str,
        parameters: Sequence[Any],
        expected: Any,
        kind: CaseKind = CaseKind.RESULT,
        is_async: bool = False,
    ) -> None:
        """Register a case asserting the function returns (or resolves to) expected."""
        arguments = tuple(parameters)

        if is_async:

            async def check_resolved() -> None:
                assert_equal(await self.invoke(arguments), expected)

            self.register_async_case(f"should return {description}", check_resolved, kind)
        else:
            self.register_case(
                f"should return {description}",
                lambda: assert_equal(self.invoke(arguments), expected),
                kind,
            )

    def run_supplementary_cases(self) -> None:
        """Register the supplementary cases in declaration order."""
        for case in self.supplementary_cases:
            match case:
                case ResultCase():
                    self.run_result_case(
                        case.description, case.args, case.expected, is_async=case.is_async
                    )
                case CallCase():
                    self.run_call_case(case)
                case CustomCase():
                    self.run_custom_case(case)

    def run_call_case(self, case: CallCase) -> None:
        """Register a case asserting expected_callable is invoked on its receiver."""
        description = f"should call the function {case.description}"
        arguments = tuple(case.args)

        if case.is_async:

            async def check_called_async() -> None:
                observation = observe(case.expected_receiver, case.expected_callable)
                try:
                    await self.invoke(arguments)
                    self._assert_observed(observation, case)
                finally:
                    observation.release()

            self.register_async_case(description, check_called_async, CaseKind.CALL)
            return

        def check_called() -> None:
            observation = observe(case.expected_receiver, case.expected_callable)
            try:
                self.invoke(arguments)
                self._assert_observed(observation, case)
            finally:
                observation.release()

        self.register_case(description, check_called, CaseKind.CALL)

    @staticmethod
    def _assert_observed(observation: Observation, case: CallCase) -> None:
        if not case.checks_arguments:
            if not observation.was_called:
                raise AssertionError(f"Expected {observation.attribute} to be called")
            return

        args = tuple(case.expected_args or ())
        kwargs = dict(case.expected_kwargs or {})
        if not observation.was_called_with_exactly(*args, **kwargs):
            raise AssertionError(
                f"Expected {observation.attribute} to be called with args={args!r} "
                f"kwargs={kwargs!r}; recorded calls: {observation.calls!r}"
            )

    def run_custom_case(self, case: CustomCase) -> None:
        if case.is_async:
            self.register_async_case(case.description, case.body, CaseKind.CUSTOM)
        else:
            self.register_case(case.description, case.body, CaseKind.CUSTOM)
