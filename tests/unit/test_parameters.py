"""Tests for ValueVariant, ParameterSpec and combination keys."""

from __future__ import annotations

import dataclasses

import pytest

from functester.domain.parameters import (
    ParameterSpec,
    ValueVariant,
    combination_key,
    invalid_examples,
    parse_combination_key,
    valid_examples,
)
from functester.exceptions import HarnessConfigError, InvalidCombinationKeyError
from tests.fakes import AGE, A, B


class TestValueVariant:
    """ValueVariant is an immutable record."""

    def test_fields(self):
        variant = ValueVariant("is negative", -1, False)
        assert variant.description == "is negative"
        assert variant.value == -1
        assert variant.is_valid is False

    def test_frozen(self):
        variant = ValueVariant("is valid", 25, True)
        with pytest.raises(dataclasses.FrozenInstanceError):
            variant.value = 26  # type: ignore[misc]


class TestParameterSpec:
    """ParameterSpec normalisation and variant helpers."""

    def test_variants_frozen_to_tuple(self):
        assert isinstance(AGE.variants, tuple)
        assert len(AGE.variants) == 2

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            AGE.name = "years"  # type: ignore[misc]

    def test_first_invalid_variant(self):
        assert AGE.first_invalid_variant() == ValueVariant("is negative", -1, False)

    def test_first_invalid_variant_skips_valid_ones(self):
        spec = ParameterSpec(
            "size",
            [ValueVariant("is one", 1, True), ValueVariant("is zero", 0, False)],
            1,
            "1",
        )
        assert spec.first_invalid_variant().value == 0

    def test_first_invalid_variant_none_when_all_valid(self):
        spec = ParameterSpec("size", [ValueVariant("is one", 1, True)], 1, "1")
        assert spec.first_invalid_variant() is None

    def test_valid_and_invalid_variants(self):
        assert [v.value for v in AGE.valid_variants] == [25]
        assert [v.value for v in AGE.invalid_variants] == [-1]

    def test_examples_in_order(self):
        assert valid_examples([A, B]) == [1, "hello"]
        assert invalid_examples([A, B]) == ["x", 7]


class TestCombinationKey:
    """Canonical keys for wrong-parameter combinations."""

    def test_sorted_and_deduplicated(self):
        assert combination_key([2, 0, 2]) == "0,2"

    def test_single_index(self):
        assert combination_key([3]) == "3"

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("0", (0,)),
            ("0,1", (0, 1)),
            ("1,0", (1, 0)),
            (" 0 , 2 ", (0, 2)),
        ],
    )
    def test_parse(self, key, expected):
        assert parse_combination_key(key) == expected

    @pytest.mark.parametrize("key", ["", "0,", "a", "0,x", "-1", "1,1"])
    def test_parse_rejects_malformed(self, key):
        with pytest.raises(InvalidCombinationKeyError):
            parse_combination_key(key)

    def test_parse_rejects_out_of_range(self):
        with pytest.raises(InvalidCombinationKeyError, match="out of range"):
            parse_combination_key("0,2", parameter_count=2)

    def test_invalid_key_is_config_error(self):
        with pytest.raises(HarnessConfigError):
            parse_combination_key("nope")
