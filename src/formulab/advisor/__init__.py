"""formulab advisor -- rule-based recommendations for an anchor experiment.

The rule table lives in ``formulab.advisor.rules`` and is evaluated by
``formulab.advisor.engine``.  The model-backed variant of the advisor
lives in ``formulab.ai``.
"""

from formulab.advisor.engine import AdvisorSection, build_advisor_sections
from formulab.advisor.rules import (
    DEFAULT_RULEBOOK,
    HIGH_FACTOR,
    LOW_FACTOR,
    Branch,
    Category,
    Predicate,
    Rule,
    RuleBook,
    high_threshold,
    is_high,
    is_low,
    low_threshold,
)

__all__ = [
    "AdvisorSection",
    "build_advisor_sections",
    "DEFAULT_RULEBOOK",
    "HIGH_FACTOR",
    "LOW_FACTOR",
    "Branch",
    "Category",
    "Predicate",
    "Rule",
    "RuleBook",
    "high_threshold",
    "is_high",
    "is_low",
    "low_threshold",
]
