"""Threshold rules for the formulation advisor.

Every rule compares one field of the anchor experiment with the
dataset-wide ``FieldStats`` of that field.  Rules are data: an ordered
table of tagged branches evaluated by one interpreter
(``formulab.advisor.engine``), so adding or testing a rule never touches
engine code.

Threshold policy (shared by every rule):
    high(v, s)  <=>  v > 1.15 * s.mean
    low(v, s)   <=>  v < 0.85 * s.mean

Templates are ``str.format`` strings.  Available placeholders:
``value``, ``mean``, ``min``, ``max``, ``high`` / ``low`` (the computed
thresholds) and ``high_factor`` / ``low_factor``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from formulab.core.fields import FieldKind, FieldRegistry
from formulab.explore.stats import FieldStats

HIGH_FACTOR = 1.15
LOW_FACTOR = 0.85


# ---------------------------------------------------------------------------
# Threshold primitives
# ---------------------------------------------------------------------------

def high_threshold(stats: FieldStats) -> float:
    return stats.mean * HIGH_FACTOR


def low_threshold(stats: FieldStats) -> float:
    return stats.mean * LOW_FACTOR


def is_high(value: float, stats: FieldStats) -> bool:
    """True when *value* is strictly above ``HIGH_FACTOR`` x mean."""
    return value > high_threshold(stats)


def is_low(value: float, stats: FieldStats) -> bool:
    """True when *value* is strictly below ``LOW_FACTOR`` x mean."""
    return value < low_threshold(stats)


class Predicate(Enum):
    """Condition under which a rule branch fires."""
    HIGH = "high"
    LOW = "low"
    AT_OR_BELOW_MEAN = "at_or_below_mean"
    OTHERWISE = "otherwise"

    def matches(self, value: float, stats: FieldStats) -> bool:
        if self is Predicate.HIGH:
            return is_high(value, stats)
        if self is Predicate.LOW:
            return is_low(value, stats)
        if self is Predicate.AT_OR_BELOW_MEAN:
            return value <= stats.mean
        return True


def template_context(value: float, stats: FieldStats) -> dict[str, Any]:
    """Values substituted into bullet and explanation templates."""
    return {
        "value": value,
        "mean": stats.mean,
        "min": stats.min,
        "max": stats.max,
        "high": high_threshold(stats),
        "low": low_threshold(stats),
        "high_factor": HIGH_FACTOR,
        "low_factor": LOW_FACTOR,
    }


# ---------------------------------------------------------------------------
# Rule table types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Branch:
    """One outcome of a rule: a predicate plus its bullet and explanation."""
    predicate: Predicate
    message: str
    explanation: str


@dataclass(frozen=True)
class Rule:
    """Ordered branches for a single field; the first matching branch fires."""
    field: str
    kind: FieldKind
    branches: tuple[Branch, ...]

    def evaluate(self, value: float, stats: FieldStats) -> tuple[str, str] | None:
        """Return ``(bullet, explanation)`` for the first matching branch, if any."""
        for branch in self.branches:
            if branch.predicate.matches(value, stats):
                ctx = template_context(value, stats)
                return branch.message.format(**ctx), branch.explanation.format(**ctx)
        return None


@dataclass(frozen=True)
class Category:
    """An advisory card: its rules in display order and the neutral fallback."""
    id: str
    title: str
    rules: tuple[Rule, ...]
    fallback_bullet: str
    fallback_explanation: str


class RuleBook:
    """Validated, ordered collection of advisory categories.

    Construction checks every rule field against *registry* (the canonical
    formulation vocabulary by default) and renders every template once, so
    a typo in a field name or placeholder fails here rather than producing
    silent "missing field" advice later.
    """

    def __init__(self, categories: tuple[Category, ...], registry: FieldRegistry | None = None) -> None:
        registry = registry if registry is not None else FieldRegistry.formulation()
        ids = [c.id for c in categories]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate category ids: {ids}")
        probe = template_context(1.0, FieldStats(mean=1.0, min=0.0, max=2.0))
        for category in categories:
            for rule in category.rules:
                registry.require(rule.field, rule.kind)
                if not rule.branches:
                    raise ValueError(f"Rule for '{rule.field}' has no branches")
                for branch in rule.branches:
                    try:
                        branch.message.format(**probe)
                        branch.explanation.format(**probe)
                    except (KeyError, IndexError, ValueError) as exc:
                        raise ValueError(
                            f"Bad template in rule for '{rule.field}': {exc}"
                        ) from exc
        self.categories = tuple(categories)
        self.registry = registry

    def fields(self) -> list[tuple[str, FieldKind]]:
        """Distinct ``(field, kind)`` pairs referenced by the rules, in table order."""
        seen: dict[tuple[str, FieldKind], None] = {}
        for category in self.categories:
            for rule in category.rules:
                seen[(rule.field, rule.kind)] = None
        return list(seen)

    def __iter__(self):
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)


# ---------------------------------------------------------------------------
# Default rule table
# ---------------------------------------------------------------------------

_HIGH_RULE = 'Rule: "high" if value > {high_factor:g}×mean ({high:.2f}).'

COST = Category(
    id="cost",
    title="Cost levers",
    rules=(
        Rule("Co-Agent 1", FieldKind.INPUT, (
            Branch(
                Predicate.HIGH,
                "Co-Agent 1 is relatively high here ({value:.1f} vs dataset mean {mean:.1f} phr). "
                "You could explore mixes that trade some of this for cheaper fillers while staying "
                "within the {min:.1f}–{max:.1f} phr window observed in past runs.",
                "Co-Agent 1: value = {value:.2f} phr, mean = {mean:.2f} phr, "
                "range = {min:.2f}–{max:.2f} phr. " + _HIGH_RULE,
            ),
        )),
        Rule("Co-Agent 2", FieldKind.INPUT, (
            Branch(
                Predicate.HIGH,
                "Co-Agent 2 is also high ({value:.1f} vs dataset mean {mean:.1f} phr). "
                "Experiments that substitute some of this for cheaper filler systems may reduce "
                "cost while staying within the {min:.1f}–{max:.1f} phr historical band.",
                "Co-Agent 2: value = {value:.2f} phr, mean = {mean:.2f} phr, "
                "range = {min:.2f}–{max:.2f} phr. " + _HIGH_RULE,
            ),
        )),
        Rule("Carbon Black High Grade", FieldKind.INPUT, (
            Branch(
                Predicate.HIGH,
                "Carbon Black High Grade is near the top of the historical range ({value:.1f} vs "
                "mean {mean:.1f} phr). If cost is driving, you could search for runs that partially "
                "replace this with lower grade carbon black or silica filler while watching "
                "mechanical properties.",
                "Carbon Black High Grade: value = {value:.2f} phr, mean = {mean:.2f} phr, "
                "range = {min:.2f}–{max:.2f} phr. " + _HIGH_RULE,
            ),
        )),
    ),
    fallback_bullet=(
        "The current run sits close to typical loadings for the main co-agents and fillers. "
        "Cost levers are likely to come from incremental filler substitutions rather than "
        "large stoichiometric changes."
    ),
    fallback_explanation=(
        "No major cost outliers detected for the tracked co-agents and fillers "
        "(none above 1.15×mean)."
    ),
)

CURE = Category(
    id="cure",
    title="Cure time & oven utilisation",
    rules=(
        Rule("Cure Time", FieldKind.OUTPUT, (
            Branch(
                Predicate.HIGH,
                "Cure time ({value:.2f} min) is slower than the dataset mean ({mean:.2f} min). "
                "You could prioritise designs with slightly higher oven temperatures or co-agent "
                "loadings that move you back towards the lower half of the observed cure-time window.",
                "Cure Time: value = {value:.2f} min, mean = {mean:.2f} min. "
                'Rule: "slow" if value > {high_factor:g}×mean ({high:.2f}).',
            ),
            Branch(
                Predicate.OTHERWISE,
                "Cure time ({value:.2f} min) is already at or better than the dataset mean "
                "({mean:.2f} min). This run can act as a reference when optimising cost without "
                "sacrificing turn-around.",
                "Cure Time: value = {value:.2f} min, mean = {mean:.2f} min. "
                'Rule: considered "acceptable" unless value > {high_factor:g}×mean ({high:.2f}).',
            ),
        )),
        Rule("Oven Temperature", FieldKind.INPUT, (
            Branch(
                Predicate.HIGH,
                "Oven temperature is at the upper part of the historical range ({value:.0f} °F vs "
                "{min:.0f}–{max:.0f} °F). If energy usage is a concern, you could explore nearby "
                "recipes that operate slightly cooler while confirming they preserve cure time "
                "and performance.",
                "Oven Temperature: value = {value:.0f} °F, mean = {mean:.0f} °F, "
                "range = {min:.0f}–{max:.0f} °F. "
                'Rule: "high" if value > {high_factor:g}×mean ({high:.0f}).',
            ),
            Branch(
                Predicate.OTHERWISE,
                "Oven temperature is moderate ({value:.0f} °F). There may be room to push "
                "temperature up slightly for faster cure when cycle-time pressure is high.",
                "Oven Temperature: value = {value:.0f} °F, mean = {mean:.0f} °F. "
                'Rule: considered "moderate" unless value > {high_factor:g}×mean ({high:.0f}).',
            ),
        )),
    ),
    fallback_bullet=(
        "This run does not record cure time or oven temperature, so there is no cure or "
        "oven-utilisation comparison to make against past runs."
    ),
    fallback_explanation="Neither Cure Time nor Oven Temperature is present on the anchor experiment.",
)

FIELD = Category(
    id="field",
    title="Field performance & scrap",
    rules=(
        Rule("Compression Set", FieldKind.OUTPUT, (
            Branch(
                Predicate.AT_OR_BELOW_MEAN,
                "Compression set ({value:.1f} %) is at or below the dataset mean ({mean:.1f} %), "
                "which is favourable for long-term sealing and lower scrap risk.",
                "Compression Set: value = {value:.1f} %, mean = {mean:.1f} %. "
                'Rule: "favourable" if value ≤ mean ({mean:.2f}).',
            ),
            Branch(
                Predicate.OTHERWISE,
                "Compression set ({value:.1f} %) is higher than typical (mean {mean:.1f} %). "
                "When changing formulation, you may want to bias towards regions where compression "
                "set trends lower, even if it costs a small amount of elongation.",
                "Compression Set: value = {value:.1f} %, mean = {mean:.1f} %. "
                'Rule: "high" if value > mean ({mean:.2f}).',
            ),
        )),
        Rule("Elongation", FieldKind.OUTPUT, (
            Branch(
                Predicate.HIGH,
                "Elongation ({value:.1f} %) is in the upper half of the dataset (mean {mean:.1f} %). "
                "That gives some headroom to trade a little elongation for cost or compression-set "
                "improvements.",
                "Elongation: value = {value:.1f} %, mean = {mean:.1f} %. "
                'Rule: "high" if value > {high_factor:g}×mean ({high:.1f}).',
            ),
            Branch(
                Predicate.LOW,
                "Elongation ({value:.1f} %) is lower than typical. When pushing cost down, it will "
                "be important to watch this metric so it does not erode further.",
                "Elongation: value = {value:.1f} %, mean = {mean:.1f} %. "
                'Rule: "low" if value < {low_factor:g}×mean ({low:.1f}).',
            ),
        )),
    ),
    fallback_bullet=(
        "Mechanical performance sits near the centre of the historical cloud. Future trials can "
        "explore small movements along the cost / cure-time axes while monitoring compression "
        "set and elongation."
    ),
    fallback_explanation=(
        "No performance comparison fired: Compression Set is not recorded on this run, "
        "and Elongation is either not recorded or within ±15% of its historical mean."
    ),
)

DEFAULT_RULEBOOK = RuleBook((COST, CURE, FIELD))
