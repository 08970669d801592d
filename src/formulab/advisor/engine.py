"""Rule-based optimization advisor.

Compares one anchor experiment against dataset-wide statistics and
returns three advisory sections (cost, cure, field performance), each
with human-readable bullets and a parallel "why" explanation.

The advisor never raises for a missing or partial dataset: absent
fields simply contribute nothing and an empty section falls back to a
neutral bullet.

Usage:
    from formulab.advisor import build_advisor_sections
    sections = build_advisor_sections(anchor, store.records)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from formulab.advisor.rules import DEFAULT_RULEBOOK, Category, RuleBook
from formulab.core import as_finite
from formulab.core.fields import FieldKind
from formulab.explore.stats import FieldStats, stats_for_field

if TYPE_CHECKING:
    from formulab.data.store import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdvisorSection:
    """One advisory card."""
    id: str
    title: str
    bullets: tuple[str, ...]
    explanation: str


def _evaluate_category(
    category: Category,
    anchor: Record,
    stats: dict[tuple[str, FieldKind], FieldStats],
) -> AdvisorSection:
    bullets: list[str] = []
    why: list[str] = []

    for rule in category.rules:
        value = as_finite(anchor.fields(rule.kind).get(rule.field))
        if value is None:
            continue
        outcome = rule.evaluate(value, stats[(rule.field, rule.kind)])
        if outcome is None:
            continue
        bullet, explanation = outcome
        logger.debug("Advisor rule fired: %s / %s", category.id, rule.field)
        bullets.append(bullet)
        why.append(explanation)

    if not bullets:
        bullets.append(category.fallback_bullet)
        why.append(category.fallback_explanation)

    return AdvisorSection(
        id=category.id,
        title=category.title,
        bullets=tuple(bullets),
        explanation="\n".join(why),
    )


def build_advisor_sections(
    anchor: Record,
    records: Iterable[Record],
    rulebook: RuleBook = DEFAULT_RULEBOOK,
) -> list[AdvisorSection]:
    """Build the advisory sections for *anchor*, in rule-book order.

    With the default rule book this is always ``[cost, cure, field]``.
    """
    records = tuple(records)
    # Stats for every field the rules reference, computed once up front.
    stats = {
        (name, kind): stats_for_field(records, name, kind)
        for name, kind in rulebook.fields()
    }
    return [_evaluate_category(category, anchor, stats) for category in rulebook]
