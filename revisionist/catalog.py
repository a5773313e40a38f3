"""Static model catalog: identifiers, limits, prices and capabilities.

The catalog is declared once as module-level tuples of frozen dataclasses and
never mutated afterwards, so any number of threads can read it without
locking. Entries are listed most-preferred first; the first entry for a
provider is its default model.

Lookups return ``None`` when nothing matches. Callers decide what to do about
a missing model (adapters fall back to the provider default).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional, Tuple


class Provider(str, Enum):
    """Supported generation backends."""

    OPENROUTER = "openrouter"
    LMSTUDIO = "lmstudio"
    OPENAI = "openai"


class Capability(str, Enum):
    JSON = "json"
    IMAGES = "images"
    FUNCTIONS = "functions"
    STREAMING = "streaming"
    THINKING = "thinking"


@dataclass(frozen=True)
class ModelSpec:
    """Metadata for a single (provider, model) pair.

    Prices are USD per million tokens. ``None`` means the model has no
    published price (local models), which is different from a free model.
    """

    provider: Provider
    display_name: str
    api_identifier: str
    context_window: Optional[int] = None
    max_output_tokens: Optional[int] = None
    input_cost_per_million: Optional[Decimal] = None
    output_cost_per_million: Optional[Decimal] = None
    capabilities: FrozenSet[Capability] = field(default_factory=frozenset)

    @property
    def has_pricing(self) -> bool:
        return (
            self.input_cost_per_million is not None
            and self.output_cost_per_million is not None
        )

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def to_dict(self) -> Dict[str, object]:
        return {
            "provider": self.provider.value,
            "display_name": self.display_name,
            "api_identifier": self.api_identifier,
            "context_window": self.context_window,
            "max_output_tokens": self.max_output_tokens,
            "input_cost_per_million": (
                float(self.input_cost_per_million)
                if self.input_cost_per_million is not None else None
            ),
            "output_cost_per_million": (
                float(self.output_cost_per_million)
                if self.output_cost_per_million is not None else None
            ),
            "capabilities": sorted(c.value for c in self.capabilities),
        }


def _caps(*names: Capability) -> FrozenSet[Capability]:
    return frozenset(names)


_J, _I, _F, _S, _T = (
    Capability.JSON,
    Capability.IMAGES,
    Capability.FUNCTIONS,
    Capability.STREAMING,
    Capability.THINKING,
)

# ---------------------------------------------------------------------------
# OpenRouter (hosted, chat-completions)
# ---------------------------------------------------------------------------

_OPENROUTER_MODELS: Tuple[ModelSpec, ...] = (
    ModelSpec(
        Provider.OPENROUTER, "Claude 3.5 Haiku", "anthropic/claude-3.5-haiku",
        context_window=200000, max_output_tokens=8192,
        input_cost_per_million=Decimal("1.00"), output_cost_per_million=Decimal("1.00"),
        capabilities=_caps(_F, _S),
    ),
    ModelSpec(
        Provider.OPENROUTER, "Anthropic Claude 3.5 Sonnet", "anthropic/claude-3.5-sonnet",
        context_window=200000, max_output_tokens=8192,
        input_cost_per_million=Decimal("3.00"), output_cost_per_million=Decimal("15.00"),
        capabilities=_caps(_F, _S, _I),
    ),
    ModelSpec(
        Provider.OPENROUTER, "Google Gemini Flash 1.5", "google/gemini-flash-1.5",
        context_window=1000000, max_output_tokens=8192,
        input_cost_per_million=Decimal("0.075"), output_cost_per_million=Decimal("0.30"),
        capabilities=_caps(_S),
    ),
    ModelSpec(
        Provider.OPENROUTER, "Google Gemini Flash 1.5 8B", "google/gemini-flash-1.5-8b",
        context_window=1000000, max_output_tokens=8192,
        input_cost_per_million=Decimal("0.0375"), output_cost_per_million=Decimal("0.15"),
        capabilities=_caps(_S),
    ),
    ModelSpec(
        Provider.OPENROUTER, "Google Gemini Pro 1.5", "google/gemini-pro-1.5",
        context_window=2000000, max_output_tokens=8192,
        input_cost_per_million=Decimal("1.25"), output_cost_per_million=Decimal("5.00"),
        capabilities=_caps(_S, _I),
    ),
    ModelSpec(
        Provider.OPENROUTER, "Mistral Large", "mistralai/mistral-large-2407",
        context_window=128000, max_output_tokens=128000,
        input_cost_per_million=Decimal("2.00"), output_cost_per_million=Decimal("6.00"),
        capabilities=_caps(_S),
    ),
    ModelSpec(
        Provider.OPENROUTER, "OpenAI 4o", "openai/gpt-4o-2024-11-20",
        context_window=128000, max_output_tokens=16000,
        input_cost_per_million=Decimal("2.50"), output_cost_per_million=Decimal("10.00"),
        capabilities=_caps(_F, _S, _I),
    ),
    ModelSpec(
        Provider.OPENROUTER, "OpenAI 4o Mini", "openai/gpt-4o-mini",
        context_window=128000, max_output_tokens=16000,
        input_cost_per_million=Decimal("0.15"), output_cost_per_million=Decimal("0.60"),
        capabilities=_caps(_F, _S),
    ),
    ModelSpec(
        Provider.OPENROUTER, "OpenAI o1 Mini", "openai/gpt-o1-mini",
        context_window=128000, max_output_tokens=66000,
        input_cost_per_million=Decimal("3.00"), output_cost_per_million=Decimal("12.00"),
        capabilities=_caps(_F, _S),
    ),
    ModelSpec(
        Provider.OPENROUTER, "OpenAI o1 Preview", "openai/gpt-o1-preview",
        context_window=128000, max_output_tokens=33000,
        input_cost_per_million=Decimal("15.00"), output_cost_per_million=Decimal("60.00"),
        capabilities=_caps(_F, _S),
    ),
)

# ---------------------------------------------------------------------------
# LM Studio (local). The wire model name comes from the adapter settings.
# ---------------------------------------------------------------------------

_LMSTUDIO_MODELS: Tuple[ModelSpec, ...] = (
    ModelSpec(Provider.LMSTUDIO, "Custom", "custom"),
)

# ---------------------------------------------------------------------------
# OpenAI (hosted, Responses API)
# ---------------------------------------------------------------------------

_OPENAI_MODELS: Tuple[ModelSpec, ...] = (
    ModelSpec(
        Provider.OPENAI, "GPT-4.1", "gpt-4.1",
        context_window=1047576, max_output_tokens=32768,
        input_cost_per_million=Decimal("8.00"), output_cost_per_million=Decimal("8.00"),
        capabilities=_caps(_J, _I, _F, _S),
    ),
    ModelSpec(
        Provider.OPENAI, "GPT-4o", "gpt-4o",
        context_window=128000, max_output_tokens=16384,
        input_cost_per_million=Decimal("2.50"), output_cost_per_million=Decimal("10.00"),
        capabilities=_caps(_J, _I, _F, _S),
    ),
    ModelSpec(
        Provider.OPENAI, "GPT-4.1 Mini", "gpt-4.1-mini",
        context_window=1047576, max_output_tokens=32768,
        input_cost_per_million=Decimal("0.10"), output_cost_per_million=Decimal("1.60"),
        capabilities=_caps(_J, _I, _F, _S),
    ),
    ModelSpec(
        Provider.OPENAI, "GPT-4.1 Nano", "gpt-4.1-nano",
        context_window=1047576, max_output_tokens=32768,
        input_cost_per_million=Decimal("0.10"), output_cost_per_million=Decimal("0.40"),
        capabilities=_caps(_J, _F, _S),
    ),
    ModelSpec(
        Provider.OPENAI, "GPT-5", "gpt-5",
        context_window=400000, max_output_tokens=128000,
        input_cost_per_million=Decimal("1.25"), output_cost_per_million=Decimal("10.00"),
        capabilities=_caps(_J, _I, _F, _S, _T),
    ),
    ModelSpec(
        Provider.OPENAI, "GPT-5 Mini", "gpt-5-mini",
        context_window=400000, max_output_tokens=128000,
        input_cost_per_million=Decimal("0.25"), output_cost_per_million=Decimal("2.00"),
        capabilities=_caps(_J, _I, _F, _S, _T),
    ),
    ModelSpec(
        Provider.OPENAI, "GPT-5 Nano", "gpt-5-nano",
        context_window=400000, max_output_tokens=128000,
        input_cost_per_million=Decimal("0.05"), output_cost_per_million=Decimal("0.40"),
        capabilities=_caps(_J, _I, _F, _S, _T),
    ),
    ModelSpec(
        Provider.OPENAI, "o3", "o3",
        context_window=200000, max_output_tokens=100000,
        input_cost_per_million=Decimal("2.00"), output_cost_per_million=Decimal("8.00"),
        capabilities=_caps(_T),
    ),
    ModelSpec(
        Provider.OPENAI, "o3 Pro", "o3-pro",
        context_window=200000, max_output_tokens=100000,
        input_cost_per_million=Decimal("20.00"), output_cost_per_million=Decimal("80.00"),
        capabilities=_caps(_T),
    ),
    ModelSpec(
        Provider.OPENAI, "o3 Deep Research", "o3-deep-research",
        context_window=200000, max_output_tokens=100000,
        input_cost_per_million=Decimal("10.00"), output_cost_per_million=Decimal("40.00"),
        capabilities=_caps(_I, _S, _T),
    ),
    ModelSpec(
        Provider.OPENAI, "o4 Mini", "o4-mini",
        context_window=200000, max_output_tokens=100000,
        input_cost_per_million=Decimal("1.10"), output_cost_per_million=Decimal("4.40"),
        capabilities=_caps(_T),
    ),
    ModelSpec(
        Provider.OPENAI, "o4 Mini Deep Research", "o4-mini-deep-research",
        context_window=200000, max_output_tokens=100000,
        input_cost_per_million=Decimal("2.00"), output_cost_per_million=Decimal("8.00"),
        capabilities=_caps(_I, _S, _T),
    ),
)

MODELS_BY_PROVIDER: Mapping[Provider, Tuple[ModelSpec, ...]] = MappingProxyType({
    Provider.OPENROUTER: _OPENROUTER_MODELS,
    Provider.LMSTUDIO: _LMSTUDIO_MODELS,
    Provider.OPENAI: _OPENAI_MODELS,
})


def _index_by_api_identifier() -> Mapping[str, ModelSpec]:
    # OpenRouter names carry a vendor prefix so identifiers do not collide
    # across providers; on a collision the first declaration wins.
    index: Dict[str, ModelSpec] = {}
    for models in MODELS_BY_PROVIDER.values():
        for spec in models:
            index.setdefault(spec.api_identifier, spec)
    return MappingProxyType(index)


_BY_API_IDENTIFIER = _index_by_api_identifier()


def list_models(provider: Provider) -> Tuple[ModelSpec, ...]:
    """Return the provider's models in declaration (preference) order."""
    return MODELS_BY_PROVIDER.get(Provider(provider), ())


def all_models() -> Tuple[ModelSpec, ...]:
    return tuple(spec for models in MODELS_BY_PROVIDER.values() for spec in models)


def find_by_api_identifier(api_identifier: str) -> Optional[ModelSpec]:
    return _BY_API_IDENTIFIER.get(api_identifier)


def find_for_provider(provider: Provider, api_identifier: str) -> Optional[ModelSpec]:
    """Look up ``api_identifier`` only among ``provider``'s models."""
    for spec in list_models(provider):
        if spec.api_identifier == api_identifier:
            return spec
    return None


def default_model(provider: Provider) -> ModelSpec:
    """First (most preferred) model declared for ``provider``."""
    return list_models(provider)[0]


__all__ = [
    "Capability",
    "ModelSpec",
    "Provider",
    "MODELS_BY_PROVIDER",
    "all_models",
    "default_model",
    "find_by_api_identifier",
    "find_for_provider",
    "list_models",
]
