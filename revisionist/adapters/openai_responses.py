"""OpenAI adapter using the Responses API.

Request shape differs from chat-completions: the system directive travels
as ``instructions`` and the user turn as ``input``. Text comes back either
in the convenience ``output_text`` field or inside the structured
``output`` array::

    {"output": [{"type": "message",
                 "content": [{"type": "output_text", "text": "..."}]}],
     "usage": {"input_tokens": 12, "output_tokens": 5, "total_tokens": 17}}

Reasoning models (catalog capability ``thinking``) reject ``temperature``,
so it is left out of their requests.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from revisionist.adapters.base import (
    MalformedResponseError,
    ModelResolution,
    WireCall,
    header_safe,
    resolve_catalog_model,
    run_connection_test,
    run_generation,
    usage_from,
)
from revisionist.catalog import Capability, Provider, find_for_provider, list_models
from revisionist.llm_base import AdapterSettings, GenerateRequest, GenerateResult, TokenUsage
from revisionist.prompts import SYSTEM_PROMPT, format_user_prompt

OPENAI_RESPONSES_URL = "https://api.openai.com/v1/responses"

# Cheapest catalog model; used for connectivity probes.
PROBE_MODEL = "gpt-4.1-nano"


def _first_of_type(items: Any, item_type: str) -> Optional[Mapping[str, Any]]:
    if not isinstance(items, list):
        return None
    for item in items:
        if isinstance(item, Mapping) and item.get("type") == item_type:
            return item
    return None


def extract_output_text(payload: Any) -> str:
    """Return the response text following the Responses API envelope rules."""
    if not isinstance(payload, Mapping):
        raise MalformedResponseError("Invalid response format from OpenAI API")

    output_text = payload.get("output_text")
    if isinstance(output_text, str) and output_text:
        return output_text

    output = payload.get("output")
    if not isinstance(output, list) or not output:
        raise MalformedResponseError("Invalid response format from OpenAI API")

    message = _first_of_type(output, "message")
    if message is None or not isinstance(message.get("content"), list) or not message["content"]:
        raise MalformedResponseError("No valid message content found in OpenAI API response")

    text_item = _first_of_type(message["content"], "output_text")
    if text_item is None or not isinstance(text_item.get("text"), str) or not text_item["text"]:
        raise MalformedResponseError("No text content found in OpenAI API response")
    return text_item["text"]


@dataclass(frozen=True)
class OpenAIResponsesAdapter:
    provider: ClassVar[Provider] = Provider.OPENAI
    # The Responses API rejects max_output_tokens below 16.
    probe_max_tokens: ClassVar[int] = 25

    settings: AdapterSettings = field(default_factory=AdapterSettings)

    def configure(self, settings: AdapterSettings) -> "OpenAIResponsesAdapter":
        return replace(self, settings=settings)

    def is_ready(self) -> bool:
        return bool(self.settings.api_key) and header_safe(self.settings.api_key)

    def generate(self, request: GenerateRequest) -> GenerateResult:
        return run_generation(self, request)

    def test_connection(self) -> bool:
        return run_connection_test(self)

    def list_available_model_identifiers(self) -> List[str]:
        return [spec.api_identifier for spec in list_models(self.provider)]

    # wire hooks

    def probe_model(self) -> str:
        return PROBE_MODEL

    def resolve_model(self, requested: str) -> Optional[ModelResolution]:
        return resolve_catalog_model(self.provider, requested)

    def build_call(self, model: str, request: GenerateRequest, max_tokens: int) -> WireCall:
        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
        }
        body: Dict[str, Any] = {"model": model, "max_output_tokens": max_tokens}
        if request.is_probe:
            body["input"] = request.instructions
        else:
            body["instructions"] = SYSTEM_PROMPT
            body["input"] = format_user_prompt(
                request.instructions,
                request.selected_text,
                request.full_context_text,
            )

        spec = find_for_provider(self.provider, model)
        if spec is None or not spec.supports(Capability.THINKING):
            body["temperature"] = request.temperature
        return WireCall(OPENAI_RESPONSES_URL, headers, body)

    def parse_response(self, payload: Any) -> Tuple[str, TokenUsage]:
        text = extract_output_text(payload)
        usage = usage_from(payload.get("usage"), "input_tokens", "output_tokens", "total_tokens")
        return text, usage


__all__ = ["OpenAIResponsesAdapter", "OPENAI_RESPONSES_URL", "PROBE_MODEL", "extract_output_text"]
