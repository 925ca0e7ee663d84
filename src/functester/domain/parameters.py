"""Parameter descriptions that drive case synthesis.

A ParameterSpec names one argument of the function under test and carries
two canonical examples (one accepted, one rejected with a type-violation
error) plus labelled ValueVariants used to assert per-value results.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from functester.exceptions import InvalidCombinationKeyError

KEY_SEPARATOR = ","


@dataclass(frozen=True)
class ValueVariant:
    """A labelled input value and whether the function should accept it.

    Attributes:
        description: Human description, appended to the parameter name in
            case descriptions (e.g. "is negative").
        value: The value passed in place of the parameter's valid example.
        is_valid: True if the call should yield the correct result.
    """

    description: str
    value: Any
    is_valid: bool


@dataclass(frozen=True)
class ParameterSpec:
    """Declarative description of one parameter of the function under test.

    Attributes:
        name: Parameter name, used in case descriptions.
        variants: Labelled values checked against the expected results.
        valid_example: A value of the correct type.
        invalid_example: A value of the wrong type.
    """

    name: str
    variants: tuple[ValueVariant, ...] = field(default_factory=tuple)
    valid_example: Any = None
    invalid_example: Any = None

    def __post_init__(self) -> None:
        # Accept any sequence and freeze it
        object.__setattr__(self, "variants", tuple(self.variants))

    @property
    def valid_variants(self) -> list[ValueVariant]:
        return [v for v in self.variants if v.is_valid]

    @property
    def invalid_variants(self) -> list[ValueVariant]:
        return [v for v in self.variants if not v.is_valid]

    def first_invalid_variant(self) -> ValueVariant | None:
        """Return the first variant expected to be rejected, if any."""
        return next((v for v in self.variants if not v.is_valid), None)


def combination_key(indices: Iterable[int]) -> str:
    """Build the canonical key for a set of wrong parameter indices.

    >>> combination_key([2, 0, 2])
    '0,2'
    """
    return KEY_SEPARATOR.join(str(i) for i in sorted(set(indices)))


def parse_combination_key(key: str, parameter_count: int | None = None) -> tuple[int, ...]:
    """Parse a combination key into its parameter indices.

    Args:
        key: Comma-joined zero-based indices, e.g. "0,1".
        parameter_count: If given, every index must be below it.

    Returns:
        Indices in the order they appear in the key.

    Raises:
        InvalidCombinationKeyError: If the key is empty, holds a non-integer
            or negative index, repeats an index, or is out of range.
    """
    parts = [part.strip() for part in str(key).split(KEY_SEPARATOR)]
    if not parts or any(part == "" for part in parts):
        raise InvalidCombinationKeyError(key, "empty index")

    indices: list[int] = []
    for part in parts:
        try:
            index = int(part)
        except ValueError:
            raise InvalidCombinationKeyError(key, f"{part!r} is not an integer") from None
        if index < 0:
            raise InvalidCombinationKeyError(key, f"negative index {index}")
        if parameter_count is not None and index >= parameter_count:
            raise InvalidCombinationKeyError(
                key, f"index {index} out of range for {parameter_count} parameter(s)"
            )
        indices.append(index)

    if len(set(indices)) != len(indices):
        raise InvalidCombinationKeyError(key, "repeated index")
    return tuple(indices)


def valid_examples(specs: Sequence[ParameterSpec]) -> list[Any]:
    """Return the valid example of every parameter, in order."""
    return [spec.valid_example for spec in specs]


def invalid_examples(specs: Sequence[ParameterSpec]) -> list[Any]:
    """Return the invalid example of every parameter, in order."""
    return [spec.invalid_example for spec in specs]
