"""Request body and response parsing for chat-completions style endpoints.

Used by the OpenRouter and LM Studio adapters, which speak the same
``/v1/chat/completions`` protocol and differ only in URL, headers and how
the model name is chosen.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

from revisionist.adapters.base import MalformedResponseError, usage_from
from revisionist.llm_base import GenerateRequest, TokenUsage
from revisionist.prompts import SYSTEM_PROMPT, format_user_prompt


def chat_messages(request: GenerateRequest) -> List[Dict[str, str]]:
    """Probe requests carry the raw instructions as the only message."""
    if request.is_probe:
        return [{"role": "user", "content": request.instructions}]
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": format_user_prompt(
                request.instructions,
                request.selected_text,
                request.full_context_text,
            ),
        },
    ]


def chat_body(model: str, request: GenerateRequest, max_tokens: int) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": chat_messages(request),
        "temperature": request.temperature,
        "max_tokens": max_tokens,
        "stream": False,
    }


def parse_chat_completion(payload: Any, label: str) -> Tuple[str, TokenUsage]:
    """Extract ``choices[0].message.content`` and the usage block.

    Missing or empty content is malformed; a missing usage block is not.
    """
    content = None
    if isinstance(payload, Mapping):
        choices = payload.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], Mapping):
            message = choices[0].get("message")
            if isinstance(message, Mapping):
                content = message.get("content")

    if not isinstance(content, str) or not content:
        raise MalformedResponseError(f"Invalid response format from {label} API")

    usage = usage_from(payload.get("usage"), "prompt_tokens", "completion_tokens", "total_tokens")
    return content, usage


__all__ = ["chat_body", "chat_messages", "parse_chat_completion"]
