"""One-shot call to the OpenAI Responses API for advisor ideas.

The request is sent exactly once: no retry, backoff or timeout of our
own (the SDK client owns those).  A missing API key is reported before
any request is attempted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable

from openai import AsyncOpenAI

from formulab.ai.prompt import build_request
from formulab.core.profile import get_api_key, get_profile

if TYPE_CHECKING:
    from formulab.data.store import Record

logger = logging.getLogger(__name__)

UNEXPECTED_SHAPE = "Model returned an unexpected response shape."
DISABLED_MESSAGE = (
    "OPENAI_API_KEY is not configured. Set it in the environment or add api_key "
    "to ~/.formulab/profile.yaml to enable model-backed advice."
)


class LlmUnavailableError(RuntimeError):
    """The model-backed advisor is disabled because no API key is configured."""

    def __init__(self, message: str = DISABLED_MESSAGE) -> None:
        super().__init__(message)


def has_api_key(api_key: str | None = None) -> bool:
    """True when an explicit or configured API key is available."""
    return bool(api_key) or get_profile().llm_enabled


def extract_text(response: Any) -> str:
    """Pull the reply text out of a Responses API result.

    Prefers ``output_text``, then the first content item of the first
    output; anything else yields a fixed "unexpected shape" message.
    """
    text = getattr(response, "output_text", None)
    if isinstance(text, str) and text:
        return text

    output = getattr(response, "output", None) or []
    first_output = output[0] if len(output) else None
    content = getattr(first_output, "content", None) or []
    first_content = content[0] if len(content) else None

    for attr in ("text", "value"):
        value = getattr(first_content, attr, None)
        if value is not None:
            return str(value)
    return UNEXPECTED_SHAPE


async def request_advice(
    anchor: Record,
    records: Iterable[Record],
    *,
    api_key: str | None = None,
    client: Any = None,
) -> str:
    """Ask the model for ideas about *anchor* and return its markdown reply.

    Raises ``LlmUnavailableError`` when no key is configured and no client
    is supplied.  Transport errors propagate to the caller unchanged.
    """
    if client is None:
        key = api_key or get_api_key()
        if not key:
            raise LlmUnavailableError()
        client = AsyncOpenAI(api_key=key)

    payload = build_request(anchor, records)
    logger.debug(
        "Requesting advisor ideas for %s (model=%s, %d prompt chars)",
        anchor.id, payload["model"], len(payload["input"]),
    )
    response = await client.responses.create(**payload)
    return extract_text(response)
