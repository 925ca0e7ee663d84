"""Assertion primitives used by synthesized cases.

All failures raise AssertionError so pytest and CaseRunner report them as
case failures rather than errors.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

_SCALAR_TYPES = (str, int, float, bool)


def _as_number(value: Any) -> float | None:
    """Coerce a scalar to a number, or None if it has no numeric reading."""
    if isinstance(value, bool):
        return float(int(value))
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return None
    return None


def loosely_equal(actual: Any, expected: Any) -> bool:
    """Compare with ==, falling back to numeric coercion between scalars.

    "1" equals 1, True equals 1 and "2.0" equals 2. An empty or blank
    string reads as 0, so "" equals 0 and False. Two strings are never
    coerced ("1" does not equal "1.0"). None only equals None, and
    non-numeric strings are compared as-is.
    """
    if actual is None or expected is None:
        return actual is expected
    if actual == expected:
        return True
    if isinstance(actual, str) and isinstance(expected, str):
        return False
    if isinstance(actual, _SCALAR_TYPES) and isinstance(expected, _SCALAR_TYPES):
        left, right = _as_number(actual), _as_number(expected)
        return left is not None and right is not None and left == right
    return False


def assert_equal(actual: Any, expected: Any) -> None:
    """Raise AssertionError unless actual loosely equals expected."""
    if not loosely_equal(actual, expected):
        raise AssertionError(f"Expected {expected!r}, got {actual!r}")


def assert_fails(thunk: Callable[[], Any], error_kind: type[BaseException]) -> None:
    """Raise AssertionError unless thunk() raises error_kind."""
    try:
        thunk()
    except error_kind:
        return
    raise AssertionError(f"Expected {error_kind.__name__} to be raised")


def assert_does_not_fail(thunk: Callable[[], Any], error_kind: type[BaseException]) -> None:
    """Raise AssertionError if thunk() raises error_kind.

    Exceptions of any other kind are ignored.
    """
    try:
        thunk()
    except error_kind as e:
        raise AssertionError(f"Unexpected {error_kind.__name__}: {e}") from e
    except Exception:
        pass
