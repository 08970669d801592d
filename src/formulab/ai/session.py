"""Anchor selection and model-request bookkeeping for the advisor view.

``AdvisorSession`` holds which experiment is the anchor and the latest
model reply.  Selecting a new anchor supersedes any request still in
flight: that request is not cancelled, but its result comes back marked
``stale`` and is not kept as the session's advice.  No UI logic.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from formulab.advisor.engine import AdvisorSection, build_advisor_sections
from formulab.ai.client import LlmUnavailableError, request_advice
from formulab.ai.parse import AdvisorReply, interpret_reply
from formulab.ai.prompt import PromptPreview, get_prompt_preview

if TYPE_CHECKING:
    from formulab.data.store import DatasetStore, Record

logger = logging.getLogger(__name__)

FAILED_MESSAGE = "Failed to fetch model suggestions."


@dataclass(frozen=True)
class LlmAdvice:
    """Outcome of one model request."""
    status: str                 # "ready", "error" or "disabled"
    anchor_id: str
    text: str = ""
    error: str = ""
    reply: AdvisorReply | None = None
    stale: bool = False


class AdvisorSession:
    """Current anchor plus the latest model advice for it."""

    def __init__(self, store: DatasetStore, *, api_key: str | None = None, client: Any = None) -> None:
        self.store = store
        self._api_key = api_key
        self._client = client
        self._generation = 0
        self.anchor_id: str = store.records[0].id if len(store) else ""
        self.advice: LlmAdvice | None = None
        self.in_flight = 0

    @property
    def anchor(self) -> Record | None:
        return self.store.get(self.anchor_id) if self.anchor_id else None

    def select_anchor(self, record_id: str) -> Record:
        """Make *record_id* the anchor; raises ``KeyError`` for an unknown id."""
        anchor = self.store[record_id]
        if record_id != self.anchor_id:
            self._generation += 1
            self.advice = None
        self.anchor_id = record_id
        return anchor

    def sections(self) -> list[AdvisorSection]:
        """Rule-based sections for the current anchor (empty with no anchor)."""
        anchor = self.anchor
        if anchor is None:
            return []
        return build_advisor_sections(anchor, self.store.records)

    def preview(self) -> PromptPreview | None:
        """Exactly what would be sent to the model for the current anchor."""
        anchor = self.anchor
        if anchor is None:
            return None
        return get_prompt_preview(anchor, self.store.records)

    async def ask(self) -> LlmAdvice | None:
        """Request model ideas for the current anchor.

        Transport failures are caught here, once, and returned as an
        ``"error"`` advice with a user-facing message.  Returns ``None``
        when there is no anchor.
        """
        anchor = self.anchor
        if anchor is None:
            return None
        generation = self._generation
        self.in_flight += 1
        try:
            text = await request_advice(
                anchor, self.store.records, api_key=self._api_key, client=self._client,
            )
            advice = LlmAdvice(
                status="ready", anchor_id=anchor.id, text=text, reply=interpret_reply(text),
            )
        except LlmUnavailableError as exc:
            advice = LlmAdvice(status="disabled", anchor_id=anchor.id, error=str(exc))
        except Exception as exc:
            logger.warning("Model request for %s failed", anchor.id, exc_info=True)
            advice = LlmAdvice(
                status="error", anchor_id=anchor.id, error=str(exc) or FAILED_MESSAGE,
            )
        finally:
            self.in_flight -= 1

        if generation != self._generation:
            logger.debug("Discarding superseded reply for %s", anchor.id)
            return replace(advice, stale=True)
        self.advice = advice
        return advice
