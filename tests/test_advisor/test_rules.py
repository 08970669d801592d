"""Tests for advisor/rules.py."""

import pytest

from formulab.advisor.rules import (
    DEFAULT_RULEBOOK,
    Branch,
    Category,
    Predicate,
    Rule,
    RuleBook,
    is_high,
    is_low,
)
from formulab.core.fields import FieldKind, FieldRegistry, UnknownFieldError
from formulab.explore.stats import FieldStats

UNIT = FieldStats(mean=1.0, min=0.0, max=2.0)


class TestThresholds:

    def test_high_is_strict(self):
        assert not is_high(1.15, UNIT)
        assert is_high(1.1500001, UNIT)

    def test_low_is_strict(self):
        assert not is_low(0.85, UNIT)
        assert is_low(0.84, UNIT)

    @pytest.mark.parametrize("value", [0.0, 0.5, 0.85, 0.9, 1.0, 1.15, 1.2, 10.0])
    def test_high_and_low_are_exclusive(self, value):
        assert not (is_high(value, UNIT) and is_low(value, UNIT))

    def test_zero_mean(self):
        zero = FieldStats()
        assert is_high(0.1, zero)
        assert not is_high(0.0, zero)
        assert not is_low(0.0, zero)

    def test_at_or_below_mean(self):
        assert Predicate.AT_OR_BELOW_MEAN.matches(1.0, UNIT)
        assert not Predicate.AT_OR_BELOW_MEAN.matches(1.01, UNIT)

    def test_otherwise_always_matches(self):
        assert Predicate.OTHERWISE.matches(-1e9, UNIT)


def _category(rule, id="x"):
    return Category(id=id, title="X", rules=(rule,), fallback_bullet="f", fallback_explanation="fe")


class TestRuleBook:

    def test_default_order(self):
        assert [c.id for c in DEFAULT_RULEBOOK] == ["cost", "cure", "field"]
        assert len(DEFAULT_RULEBOOK) == 3

    def test_fields_are_distinct_and_ordered(self):
        fields = DEFAULT_RULEBOOK.fields()
        assert fields[0] == ("Co-Agent 1", FieldKind.INPUT)
        assert ("Cure Time", FieldKind.OUTPUT) in fields
        assert len(fields) == len(set(fields))

    def test_unknown_field_rejected(self):
        rule = Rule("Co-Agnet 1", FieldKind.INPUT, (Branch(Predicate.HIGH, "m", "e"),))
        with pytest.raises(UnknownFieldError, match="Co-Agnet 1"):
            RuleBook((_category(rule),))

    def test_wrong_kind_rejected(self):
        rule = Rule("Cure Time", FieldKind.INPUT, (Branch(Predicate.HIGH, "m", "e"),))
        with pytest.raises(UnknownFieldError):
            RuleBook((_category(rule),))

    def test_bad_placeholder_rejected(self):
        rule = Rule("Cure Time", FieldKind.OUTPUT, (Branch(Predicate.HIGH, "{valu:.1f}", "e"),))
        with pytest.raises(ValueError, match="Bad template"):
            RuleBook((_category(rule),))

    def test_empty_branches_rejected(self):
        rule = Rule("Cure Time", FieldKind.OUTPUT, ())
        with pytest.raises(ValueError, match="no branches"):
            RuleBook((_category(rule),))

    def test_duplicate_ids_rejected(self):
        rule = Rule("Cure Time", FieldKind.OUTPUT, (Branch(Predicate.OTHERWISE, "m", "e"),))
        with pytest.raises(ValueError, match="Duplicate"):
            RuleBook((_category(rule, "a"), _category(rule, "a")))

    def test_custom_registry(self):
        registry = FieldRegistry(inputs=["Speed"], outputs=[])
        rule = Rule("Speed", FieldKind.INPUT, (Branch(Predicate.HIGH, "{value:.0f}", "e"),))
        book = RuleBook((_category(rule),), registry=registry)
        assert book.registry is registry


def test_rule_evaluate_first_match_wins():
    rule = Rule("Elongation", FieldKind.OUTPUT, (
        Branch(Predicate.HIGH, "high {value:.1f}", "h"),
        Branch(Predicate.OTHERWISE, "other", "o"),
    ))
    assert rule.evaluate(2.0, UNIT) == ("high 2.0", "h")
    assert rule.evaluate(1.0, UNIT) == ("other", "o")


def test_rule_evaluate_no_match():
    rule = Rule("Elongation", FieldKind.OUTPUT, (Branch(Predicate.LOW, "low", "l"),))
    assert rule.evaluate(1.0, UNIT) is None
