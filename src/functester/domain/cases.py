"""Supplementary cases written by hand alongside the synthesized matrix.

Each kind of case is its own frozen dataclass; the harness dispatches on
the concrete type.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class ResultCase:
    """Call the function and assert the (awaited) result equals `expected`."""

    description: str
    args: Sequence[Any]
    expected: Any
    is_async: bool = False


@dataclass(frozen=True)
class CallCase:
    """Call the function and assert `expected_callable` was invoked.

    Attributes:
        description: Case description (prefixed with "should call the function").
        args: Arguments for the function under test.
        expected_callable: The callable expected to be invoked, as a reference
            (function, bound method, static or class method).
        expected_receiver: The object owning `expected_callable` (module,
            class or instance). The observation is installed there.
        expected_args: Exact positional arguments expected. When both
            `expected_args` and `expected_kwargs` are None, any call passes.
        expected_kwargs: Exact keyword arguments expected.
        is_async: The function under test returns an awaitable.
    """

    description: str
    args: Sequence[Any]
    expected_callable: Callable[..., Any]
    expected_receiver: Any
    expected_args: Sequence[Any] | None = None
    expected_kwargs: Mapping[str, Any] | None = None
    is_async: bool = False

    @property
    def checks_arguments(self) -> bool:
        return self.expected_args is not None or self.expected_kwargs is not None


@dataclass(frozen=True)
class CustomCase:
    """Run an arbitrary assertion body; the function under test is not called."""

    description: str
    body: Callable[[], Any]
    is_async: bool = False


SupplementaryCase: TypeAlias = ResultCase | CallCase | CustomCase
