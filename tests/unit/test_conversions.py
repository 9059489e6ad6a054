"""Tests for the conversion registry."""

from __future__ import annotations

import pytest

from dimcalc.core.conversions import (
    DEFAULT_CONVERSIONS,
    UNITLESS,
    WILDCARD,
    ConversionKey,
    ConversionOutput,
    ConversionRegistry,
    Operator,
    default_unit_conversions,
)
from dimcalc.core.units import UnitValue


def _tagged(tag: str):
    return lambda left, right: ConversionOutput(0, tag)


class TestConversionKey:
    """Key construction."""

    def test_none_maps_to_unitless_slot(self) -> None:
        key = ConversionKey.of("+", None, "px")
        assert key == ConversionKey(Operator.ADD, UNITLESS, "px")
        assert key.left == ""

    def test_wildcard_slot(self) -> None:
        assert ConversionKey.of("*", WILDCARD, "px").left == "*"

    def test_unknown_operator(self) -> None:
        with pytest.raises(ValueError):
            ConversionKey.of("%", "px", "px")


class TestResolve:
    """Four-step most-specific-first lookup."""

    def test_specificity_order(self) -> None:
        registry = ConversionRegistry()
        registry.register("+", "*", "*", _tagged("any"))
        assert registry.resolve("+", "px", "rem")(None, None).unit == "any"

        registry.register("+", "*", "rem", _tagged("right"))
        assert registry.resolve("+", "px", "rem")(None, None).unit == "right"

        registry.register("+", "px", "*", _tagged("left"))
        assert registry.resolve("+", "px", "rem")(None, None).unit == "left"

        registry.register("+", "px", "rem", _tagged("exact"))
        assert registry.resolve("+", "px", "rem")(None, None).unit == "exact"

    def test_operator_is_part_of_key(self) -> None:
        registry = ConversionRegistry([(("+", "px", "rem"), _tagged("add"))])
        assert registry.resolve("-", "px", "rem") is None

    def test_unitless_slot_only_matches_unitless(self) -> None:
        registry = ConversionRegistry([(("+", None, "px"), _tagged("unitless"))])
        assert registry.resolve("+", None, "px") is not None
        assert registry.resolve("+", "em", "px") is None

    def test_wildcard_matches_unitless(self) -> None:
        registry = ConversionRegistry([(("+", "*", "px"), _tagged("any"))])
        assert registry.resolve("+", None, "px") is not None

    def test_no_rule(self) -> None:
        assert ConversionRegistry().resolve("+", "px", "em") is None


class TestRegistry:
    """Registration and collection behavior."""

    def test_register_replaces_existing(self) -> None:
        registry = ConversionRegistry()
        registry.register("+", "px", "rem", _tagged("first"))
        registry.register("+", "px", "rem", _tagged("second"))
        assert len(registry) == 1
        assert registry.resolve("+", "px", "rem")(None, None).unit == "second"

    def test_update_returns_count(self) -> None:
        registry = ConversionRegistry()
        count = registry.update([(("+", "a", "b"), _tagged("x")), (("-", "a", "b"), _tagged("y"))])
        assert count == 2
        assert len(registry) == 2

    def test_mapping_protocol(self) -> None:
        fn = _tagged("x")
        registry = ConversionRegistry([(("*", "px", None), fn)])
        key = ConversionKey.of("*", "px", None)
        assert key in registry
        assert registry[key] is fn
        assert list(registry) == [key]

    def test_copy_is_independent(self) -> None:
        registry = ConversionRegistry([(("+", "a", "b"), _tagged("x"))])
        clone = registry.copy()
        clone.register("-", "a", "b", _tagged("y"))
        assert len(registry) == 1
        assert len(clone) == 2

    def test_repr(self) -> None:
        assert repr(ConversionRegistry()) == "ConversionRegistry(0 rules)"


class TestDefaults:
    """Default unitless rules."""

    def test_default_rules(self) -> None:
        registry = default_unit_conversions()
        assert len(registry) == len(DEFAULT_CONVERSIONS) == 4
        assert registry.resolve("*", None, "px") is not None
        assert registry.resolve("/", "px", None) is not None
        assert registry.resolve("+", None, "px") is None

    def test_default_rule_results(self) -> None:
        registry = default_unit_conversions()
        scale = registry.resolve("*", None, "px")
        assert scale(UnitValue(2), UnitValue(3, "px")) == ConversionOutput(6, "px")
        divide = registry.resolve("/", None, "px")
        assert divide(UnitValue(6), UnitValue(3, "px")) == ConversionOutput(2, "px")

    def test_fresh_registry_each_call(self) -> None:
        assert default_unit_conversions() is not default_unit_conversions()
