"""Prompt compilation for the model-backed optimization advisor.

Builds a compact, deterministic prompt from one anchor experiment and the
dataset, estimates its token cost, and assembles the request payload
that the transport sends.  Nothing here keeps state between calls: the
response-format contract is restated in every prompt.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from formulab.core import as_finite
from formulab.explore.stats import summarize_values

if TYPE_CHECKING:
    from formulab.data.store import Record

MODEL_NAME = "gpt-4.1-mini"
MAX_OUTPUT_TOKENS = 350
CHARS_PER_TOKEN = 4

# Section headers the model is asked to produce; ``parse_sections`` splits on them.
SECTION_HEADERS: tuple[str, ...] = (
    "### 1) Cost Levers",
    "### 2) Cure Time & Oven Utilization",
    "### 3) Field Performance & Scrap",
)

_PREAMBLE = (
    "You are helping a formulations engineer working on an elastomer system.",
    'They are looking at a *single* experimental run ("anchor experiment") in the context '
    "of a small historical dataset.",
    "",
    "Your job:",
    "- Identify cost levers (cheaper raw materials, lower expensive inputs, etc.)",
    "- Identify levers for cure time and oven utilisation",
    "- Comment on field performance & scrap risk (compression set, tensile, elongation)",
    "- Make **specific, numbered suggestions** that they can try next, not vague advice.",
)

_RESPONSE_FORMAT = (
    "Format your response as three markdown sections:",
    *SECTION_HEADERS,
    "",
    "Within each section, provide 2–4 short, concrete, numbered ideas that:",
    '- Refer to specific inputs (e.g. "Co-Agent 1", "Silica Filler 2", "Oven Temperature")',
    "- Briefly justify *why* the change might help compared to the dataset statistics",
    "- Avoid changing everything at once; suggest small, testable moves.",
)


@dataclass(frozen=True)
class PromptPreview:
    """The exact prompt text plus a rough token estimate, for display before sending."""
    text: str
    estimated_tokens: int


def _fmt(value: object) -> str:
    number = as_finite(value)
    return f"{number:.2f}" if number is not None else "n/a"


def _listing(values: Mapping[str, object]) -> str:
    return "\n".join(f"{name}: {_fmt(value)}" for name, value in values.items())


def _output_stats_line(name: str, records: tuple[Record, ...]) -> str:
    summary = summarize_values(rec.outputs.get(name) for rec in records)
    if summary is None:
        return f"{name}: no historical data available"
    return (
        f"{name}: mean={summary.mean:.2f}, median={summary.median:.2f}, "
        f"min={summary.min:.2f}, max={summary.max:.2f}"
    )


def build_prompt(anchor: Record, records: Iterable[Record]) -> str:
    """Assemble the advisor prompt for *anchor* against the whole dataset."""
    records = tuple(records)
    stats_lines = [_output_stats_line(name, records) for name in anchor.outputs]

    return "\n".join([
        *_PREAMBLE,
        "",
        f"Anchor experiment ID: {anchor.id}",
        "",
        "Inputs (phr):",
        _listing(anchor.inputs),
        "",
        "Outputs (performance):",
        _listing(anchor.outputs),
        "",
        "Dataset summary:",
        f"Number of experiments: {len(records)}",
        *stats_lines,
        "",
        *_RESPONSE_FORMAT,
    ])


def estimate_tokens(prompt: str) -> int:
    """Rough total token estimate: ~4 characters per prompt token plus the reply budget.

    This is not a tokenizer; it only lets a caller show how big a call is.
    """
    return math.ceil(len(prompt) / CHARS_PER_TOKEN) + MAX_OUTPUT_TOKENS


def get_prompt_preview(anchor: Record, records: Iterable[Record]) -> PromptPreview:
    """Prompt text and token estimate for *anchor*."""
    text = build_prompt(anchor, records)
    return PromptPreview(text=text, estimated_tokens=estimate_tokens(text))


def build_request(anchor: Record, records: Iterable[Record]) -> dict[str, Any]:
    """Request payload for the Responses API."""
    return {
        "model": MODEL_NAME,
        "input": build_prompt(anchor, records),
        "max_output_tokens": MAX_OUTPUT_TOKENS,
    }
