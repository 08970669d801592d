"""formulab AI module -- model-backed ideas for the optimization advisor.

This package provides:

1. **prompt** -- Compile a bounded, deterministic prompt for one anchor
   experiment and estimate its token cost.

2. **parse** -- Tolerantly parse the model's markdown reply into the same
   ``title`` / ``bullets`` shape used by the rule-based advisor.

3. **client** -- Send the prompt once to the OpenAI Responses API.

4. **session** -- Track the current anchor and supersede stale replies.

The rule-based advisor (``formulab.advisor``) always works.  The model-backed
path needs an API key: set ``OPENAI_API_KEY`` or ``api_key`` in
``~/.formulab/profile.yaml``.

Usage:
    from formulab.ai import get_prompt_preview, parse_sections, AdvisorSession
"""

from formulab.ai.client import LlmUnavailableError, extract_text, has_api_key, request_advice
from formulab.ai.parse import AdvisorReply, LlmSection, interpret_reply, parse_sections
from formulab.ai.prompt import (
    MAX_OUTPUT_TOKENS,
    MODEL_NAME,
    PromptPreview,
    build_prompt,
    build_request,
    estimate_tokens,
    get_prompt_preview,
)
from formulab.ai.session import AdvisorSession, LlmAdvice

__all__ = [
    "LlmUnavailableError",
    "extract_text",
    "has_api_key",
    "request_advice",
    "AdvisorReply",
    "LlmSection",
    "interpret_reply",
    "parse_sections",
    "MAX_OUTPUT_TOKENS",
    "MODEL_NAME",
    "PromptPreview",
    "build_prompt",
    "build_request",
    "estimate_tokens",
    "get_prompt_preview",
    "AdvisorSession",
    "LlmAdvice",
]
