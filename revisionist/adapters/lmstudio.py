"""LM Studio adapter: a local OpenAI-compatible server, no authentication.

The catalog holds a single placeholder entry (``custom``); the model name
sent on the wire is whatever model the user loaded locally, taken from
``AdapterSettings.local_model_name``.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, List, Optional, Tuple

from revisionist import config
from revisionist.adapters.base import (
    ModelResolution,
    WireCall,
    run_connection_test,
    run_generation,
)
from revisionist.adapters.chat_completions import chat_body, parse_chat_completion
from revisionist.catalog import Provider, find_for_provider, list_models
from revisionist.llm_base import AdapterSettings, GenerateRequest, GenerateResult, TokenUsage


@dataclass(frozen=True)
class LMStudioAdapter:
    provider: ClassVar[Provider] = Provider.LMSTUDIO
    probe_max_tokens: ClassVar[int] = config.PROBE_MAX_TOKENS

    settings: AdapterSettings = field(default_factory=AdapterSettings)

    @property
    def base_url(self) -> str:
        return f"http://localhost:{self.settings.port}"

    def configure(self, settings: AdapterSettings) -> "LMStudioAdapter":
        return replace(self, settings=settings)

    def is_ready(self) -> bool:
        return bool(str(self.settings.port).strip()) and bool(self.settings.local_model_name)

    def generate(self, request: GenerateRequest) -> GenerateResult:
        return run_generation(self, request)

    def test_connection(self) -> bool:
        return run_connection_test(self)

    def list_available_model_identifiers(self) -> List[str]:
        return [self.settings.local_model_name]

    # wire hooks

    def probe_model(self) -> str:
        return self.settings.local_model_name

    def resolve_model(self, requested: str) -> Optional[ModelResolution]:
        models = list_models(self.provider)
        if not models:
            return None
        local_name = self.settings.local_model_name
        spec = find_for_provider(self.provider, requested) or models[0]
        known = requested == local_name or requested == spec.api_identifier
        return ModelResolution(spec, requested, local_name, substituted=not known)

    def build_call(self, model: str, request: GenerateRequest, max_tokens: int) -> WireCall:
        headers = {"Content-Type": "application/json"}
        return WireCall(
            f"{self.base_url}/v1/chat/completions",
            headers,
            chat_body(model, request, max_tokens),
        )

    def parse_response(self, payload: Any) -> Tuple[str, TokenUsage]:
        return parse_chat_completion(payload, "LM Studio")


__all__ = ["LMStudioAdapter"]
