"""Tolerant parser for the advisor model's markdown reply.

The expected shape is::

    ### Section title
    1. First idea
    2. Second idea

Replies that drift from it are recovered as best we can rather than
rejected: a block of plain prose becomes a single bullet, and text with
no recognizable sections is kept verbatim as a raw reply.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_LEADING_HEADER = re.compile(r"^###\s*")
_HEADER_SPLIT = re.compile(r"\n###\s*")
_ORDINAL = re.compile(r"^\d+\.\s*")


@dataclass(frozen=True)
class LlmSection:
    """One parsed reply section."""
    title: str
    bullets: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AdvisorReply:
    """Either well-formed sections (``kind == "sections"``) or the raw text (``kind == "raw"``)."""
    kind: str
    sections: tuple[LlmSection, ...] = field(default_factory=tuple)
    raw_text: str = ""

    @property
    def is_structured(self) -> bool:
        return self.kind == "sections"


def parse_sections(text: str) -> list[LlmSection]:
    """Split a markdown reply into titled sections of bullets.

    Empty or blank input gives an empty list.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return []

    normalised = _LEADING_HEADER.sub("", trimmed, count=1)
    sections: list[LlmSection] = []

    for raw in _HEADER_SPLIT.split(normalised):
        lines = [line.strip() for line in raw.split("\n")]
        if not lines[0]:
            continue

        title = lines[0]
        body = lines[1:]

        bullets = []
        for line in body:
            if not line:
                continue
            cleaned = _ORDINAL.sub("", line, count=1).strip()
            if cleaned:
                bullets.append(cleaned)

        # Nothing survived the ordinal stripping: keep the body as one bullet.
        if not bullets:
            joined = " ".join(body).strip()
            if joined:
                bullets.append(joined)

        sections.append(LlmSection(title=title, bullets=tuple(bullets)))

    return sections


def interpret_reply(text: str) -> AdvisorReply:
    """Parse *text* into sections, falling back to the raw text when none are found."""
    sections = parse_sections(text)
    if sections:
        return AdvisorReply(kind="sections", sections=tuple(sections))
    return AdvisorReply(kind="raw", raw_text=(text or "").strip())
