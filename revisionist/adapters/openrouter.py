"""OpenRouter adapter: hosted chat-completions with bearer auth.

OpenRouter also wants attribution headers (``HTTP-Referer`` and
``X-Title``) identifying the calling application.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, List, Optional, Tuple

from revisionist import config
from revisionist.adapters.base import (
    ModelResolution,
    WireCall,
    header_safe,
    resolve_catalog_model,
    run_connection_test,
    run_generation,
)
from revisionist.adapters.chat_completions import chat_body, parse_chat_completion
from revisionist.catalog import Provider, default_model, list_models
from revisionist.llm_base import AdapterSettings, GenerateRequest, GenerateResult, TokenUsage

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


@dataclass(frozen=True)
class OpenRouterAdapter:
    provider: ClassVar[Provider] = Provider.OPENROUTER
    probe_max_tokens: ClassVar[int] = config.PROBE_MAX_TOKENS

    settings: AdapterSettings = field(default_factory=AdapterSettings)

    def configure(self, settings: AdapterSettings) -> "OpenRouterAdapter":
        return replace(self, settings=settings)

    def is_ready(self) -> bool:
        settings = self.settings
        return bool(settings.api_key) and header_safe(
            settings.api_key, settings.referrer, settings.app_name
        )

    def generate(self, request: GenerateRequest) -> GenerateResult:
        return run_generation(self, request)

    def test_connection(self) -> bool:
        return run_connection_test(self)

    def list_available_model_identifiers(self) -> List[str]:
        return [spec.api_identifier for spec in list_models(self.provider)]

    # wire hooks

    def probe_model(self) -> str:
        return default_model(self.provider).api_identifier

    def resolve_model(self, requested: str) -> Optional[ModelResolution]:
        return resolve_catalog_model(self.provider, requested)

    def build_call(self, model: str, request: GenerateRequest, max_tokens: int) -> WireCall:
        headers = {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.referrer,
            "X-Title": self.settings.app_name,
        }
        return WireCall(OPENROUTER_URL, headers, chat_body(model, request, max_tokens))

    def parse_response(self, payload: Any) -> Tuple[str, TokenUsage]:
        return parse_chat_completion(payload, "OpenRouter")


__all__ = ["OpenRouterAdapter", "OPENROUTER_URL"]
