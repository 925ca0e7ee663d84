"""Case plan produced by a harness and executed by a runner.

A harness never runs anything itself: run() returns a CaseGroup whose
TestCases are executed by CaseRunner, by pytest through
functester.pytest_support, or by the CLI.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class CaseKind(Enum):
    """Where a case comes from."""

    NO_ARGUMENTS = auto()  # Called with zero arguments
    WRONG_TYPE = auto()  # One parameter replaced by its invalid example
    MISSING_ARGUMENTS = auto()  # Trailing parameters dropped
    CORRECT_TYPES = auto()  # All valid examples
    VALUE_VARIANT = auto()  # One parameter replaced by a ValueVariant
    WRONG_COMBINATION = auto()  # Several parameters replaced by invalid variants
    RESULT = auto()  # Supplementary ResultCase
    CALL = auto()  # Supplementary CallCase
    CUSTOM = auto()  # Supplementary CustomCase

    @property
    def is_matrix(self) -> bool:
        """Whether the case belongs to the parameter-validation matrix."""
        return self in _MATRIX_KINDS


_MATRIX_KINDS = frozenset(
    {
        CaseKind.NO_ARGUMENTS,
        CaseKind.WRONG_TYPE,
        CaseKind.MISSING_ARGUMENTS,
        CaseKind.CORRECT_TYPES,
    }
)


@dataclass(frozen=True)
class TestCase:
    """A single runnable case.

    Attributes:
        description: Human-readable case name.
        kind: Origin of the case.
        body: Zero-argument callable. For async cases it returns an awaitable
            which is driven to completion by execute().
        is_async: Whether body returns an awaitable.
    """

    __test__ = False  # not a pytest test class

    description: str
    kind: CaseKind
    body: Callable[[], Any]
    is_async: bool = False

    def execute(self) -> None:
        """Run the case body, raising whatever it raises."""
        if not self.is_async:
            self.body()
            return

        awaitable = self.body()
        if not inspect.isawaitable(awaitable):
            raise TypeError(
                f"Async case {self.description!r} body returned "
                f"{type(awaitable).__name__}, expected an awaitable"
            )
        asyncio.run(_settle(awaitable))


async def _settle(awaitable: Any) -> Any:
    return await awaitable


@dataclass
class CaseGroup:
    """Ordered cases registered for one function under test."""

    name: str
    cases: list[TestCase] = field(default_factory=list)

    def add(self, case: TestCase) -> None:
        self.cases.append(case)

    def by_kind(self, kind: CaseKind) -> list[TestCase]:
        return [case for case in self.cases if case.kind == kind]

    @property
    def matrix_cases(self) -> list[TestCase]:
        return [case for case in self.cases if case.kind.is_matrix]

    @property
    def descriptions(self) -> list[str]:
        return [case.description for case in self.cases]

    def __iter__(self) -> Iterator[TestCase]:
        return iter(self.cases)

    def __len__(self) -> int:
        return len(self.cases)
