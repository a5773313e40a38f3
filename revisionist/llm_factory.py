"""Adapter factory — returns a configured adapter for a provider name.

Supported provider names (case-insensitive):

- ``openrouter`` (default) — hosted chat-completions, needs ``OPENROUTER_API_KEY``
- ``lmstudio``             — local LM Studio server on ``LMSTUDIO_PORT``
- ``openai``               — OpenAI Responses API, needs ``OPENAI_API_KEY``

Callers should use ``create_adapter()`` instead of instantiating adapter
classes directly. An unknown name raises :class:`UnknownProviderError`,
a ``ValueError`` the caller is expected to catch and show to the user.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from revisionist import config
from revisionist.adapters.base import GenerateCapable
from revisionist.catalog import Provider
from revisionist.llm_base import AdapterSettings

LOG = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = tuple(p.value for p in Provider)


class UnknownProviderError(ValueError):
    """Raised when a provider name does not map to any adapter."""

    def __init__(self, provider_name: str):
        self.provider_name = provider_name
        super().__init__(
            f"Unknown provider '{provider_name}'. "
            f"Supported values: {', '.join(SUPPORTED_PROVIDERS)}"
        )


def _openrouter() -> GenerateCapable:
    from revisionist.adapters.openrouter import OpenRouterAdapter
    return OpenRouterAdapter()


def _lmstudio() -> GenerateCapable:
    from revisionist.adapters.lmstudio import LMStudioAdapter
    return LMStudioAdapter()


def _openai() -> GenerateCapable:
    from revisionist.adapters.openai_responses import OpenAIResponsesAdapter
    return OpenAIResponsesAdapter()


_BUILDERS: Dict[Provider, Callable[[], GenerateCapable]] = {
    Provider.OPENROUTER: _openrouter,
    Provider.LMSTUDIO: _lmstudio,
    Provider.OPENAI: _openai,
}


def parse_provider(provider_name: Optional[str]) -> Provider:
    """Normalize a provider name; ``None`` means the configured default."""
    name = (provider_name or config.DEFAULT_PROVIDER).lower().strip()
    try:
        return Provider(name)
    except ValueError:
        raise UnknownProviderError(name) from None


def settings_from_env(provider: Provider) -> AdapterSettings:
    """Build adapter settings for ``provider`` from configuration."""
    api_keys = {
        Provider.OPENROUTER: config.OPENROUTER_API_KEY,
        Provider.OPENAI: config.OPENAI_API_KEY,
        Provider.LMSTUDIO: "",
    }
    return AdapterSettings(
        api_key=api_keys[provider],
        port=config.LMSTUDIO_PORT,
        local_model_name=config.LMSTUDIO_MODEL,
        timeout=config.REQUEST_TIMEOUT,
        referrer=config.REFERRER,
        app_name=config.APP_NAME,
    )


def create_adapter(
    provider_name: Optional[str] = None,
    settings: Optional[AdapterSettings] = None,
) -> GenerateCapable:
    """Instantiate and configure the adapter for ``provider_name``.

    Parameters
    ----------
    provider_name : str | None
        Provider to use; falls back to ``REVISIONIST_PROVIDER``.
    settings : AdapterSettings | None
        Credentials/endpoint; read from the environment when omitted.
    """
    provider = parse_provider(provider_name)
    if settings is None:
        settings = settings_from_env(provider)

    adapter = _BUILDERS[provider]().configure(settings)
    LOG.info("Adapter created: %s (ready=%s)", provider.value, adapter.is_ready())
    return adapter


__all__ = [
    "SUPPORTED_PROVIDERS",
    "UnknownProviderError",
    "create_adapter",
    "parse_provider",
    "settings_from_env",
]
