"""Tests for ai/parse.py."""

from formulab.ai.parse import LlmSection, interpret_reply, parse_sections


def test_well_formed_reply():
    text = "### 1) Cost Levers\n1. Cut Co-Agent 1\n2. Try Silica Filler 2\n### 2) Cure\n1. Raise oven"
    assert parse_sections(text) == [
        LlmSection("1) Cost Levers", ("Cut Co-Agent 1", "Try Silica Filler 2")),
        LlmSection("2) Cure", ("Raise oven",)),
    ]


def test_prose_lines_are_kept_as_bullets():
    sections = parse_sections("### Ideas\nLower the oven a bit.\n\n3.   Swap fillers")
    assert sections == [LlmSection("Ideas", ("Lower the oven a bit.", "Swap fillers"))]


def test_leading_text_without_header():
    sections = parse_sections("Intro line\nmore\n### Next\n1. x")
    assert sections[0] == LlmSection("Intro line", ("more",))
    assert sections[1] == LlmSection("Next", ("x",))


def test_header_without_body():
    assert parse_sections("### Only a title") == [LlmSection("Only a title", ())]


def test_blank_input():
    assert parse_sections("") == []
    assert parse_sections("   \n  ") == []
    assert parse_sections(None) == []


def test_trailing_empty_header_is_skipped():
    sections = parse_sections("### A\n1. a\n###")
    assert [s.title for s in sections] == ["A"]


def test_interpret_reply_structured():
    reply = interpret_reply("### A\n1. a")
    assert reply.is_structured
    assert reply.sections == (LlmSection("A", ("a",)),)


def test_interpret_reply_raw():
    reply = interpret_reply("   ")
    assert reply.kind == "raw"
    assert not reply.is_structured
    assert reply.raw_text == ""


def test_numbered_and_prose_sections():
    assert parse_sections("### A\n1. x\n2. y\n### B\nplain prose") == [
        LlmSection("A", ("x", "y")),
        LlmSection("B", ("plain prose",)),
    ]
