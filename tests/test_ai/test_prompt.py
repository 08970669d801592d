"""Tests for ai/prompt.py."""

import math

from formulab.ai.prompt import (
    MAX_OUTPUT_TOKENS,
    MODEL_NAME,
    SECTION_HEADERS,
    build_prompt,
    build_request,
    estimate_tokens,
    get_prompt_preview,
)
from formulab.data.store import Record


def test_prompt_contents(store):
    prompt = build_prompt(store["A"], store.records)
    assert "Anchor experiment ID: A" in prompt
    assert "Co-Agent 1: 1.00" in prompt
    assert "Cure Time: 8.00" in prompt
    assert "Number of experiments: 3" in prompt
    assert "Tensile Strength: mean=20.00, median=20.00, min=10.00, max=30.00" in prompt
    # Upper median of [400, 400, 700].
    assert "Elongation: mean=500.00, median=400.00, min=400.00, max=700.00" in prompt
    for header in SECTION_HEADERS:
        assert header in prompt


def test_prompt_sections_in_order(store):
    prompt = build_prompt(store["A"], store.records)
    positions = [prompt.index(marker) for marker in (
        "Anchor experiment ID", "Inputs (phr):", "Outputs (performance):",
        "Dataset summary:", "Format your response",
    )]
    assert positions == sorted(positions)


def test_prompt_is_deterministic(store):
    assert build_prompt(store["C"], store.records) == build_prompt(store["C"], store.records)


def test_output_without_history():
    anchor = Record("x", outputs={"Viscosity": 42.0})
    prompt = build_prompt(anchor, [Record("y", outputs={"Viscosity": math.nan})])
    assert "Viscosity: no historical data available" in prompt
    assert "Number of experiments: 1" in prompt


def test_non_finite_anchor_value():
    anchor = Record("x", inputs={"Polymer 1": math.nan})
    assert "Polymer 1: n/a" in build_prompt(anchor, [anchor])


def test_estimate_tokens():
    assert estimate_tokens("") == MAX_OUTPUT_TOKENS
    assert estimate_tokens("abcd") == 1 + MAX_OUTPUT_TOKENS
    assert estimate_tokens("abcde") == 2 + MAX_OUTPUT_TOKENS


def test_estimate_covers_prompt(store):
    preview = get_prompt_preview(store["B"], store.records)
    assert preview.estimated_tokens >= math.ceil(len(preview.text) / 4)
    assert preview.text == build_prompt(store["B"], store.records)


def test_build_request(store):
    request = build_request(store["A"], store.records)
    assert request == {
        "model": MODEL_NAME,
        "input": build_prompt(store["A"], store.records),
        "max_output_tokens": 350,
    }
