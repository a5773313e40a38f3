"""Adapter contract and the generation pipeline every adapter runs.

There is no adapter base class. Each provider adapter is an independent,
frozen dataclass that satisfies :class:`GenerateCapable` and supplies three
wire hooks (``resolve_model``, ``build_call``, ``parse_response``) that
:func:`run_generation` drives. Adding a provider means writing one more
module with those hooks; nothing here changes.

The pipeline performs exactly one HTTP call and never raises: every failure
comes back as a tagged :class:`~revisionist.llm_base.GenerateResult`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Tuple

import requests

from revisionist import config
from revisionist.catalog import ModelSpec, Provider, default_model, find_for_provider, list_models
from revisionist.llm_base import (
    AdapterSettings,
    ErrorKind,
    GenerateRequest,
    GenerateResult,
    TokenUsage,
)

LOG = logging.getLogger(__name__)


class MalformedResponseError(ValueError):
    """Raised by ``parse_response`` hooks when a 2xx envelope lacks content."""


@dataclass(frozen=True)
class ModelResolution:
    """Which catalog entry a request resolved to, and what goes on the wire."""
    spec: ModelSpec
    requested: str
    wire_model: str
    substituted: bool

    def result_fields(self) -> Dict[str, Any]:
        return {
            "requested_model": self.requested,
            "model_used": self.wire_model,
            "model_substituted": self.substituted,
        }


@dataclass(frozen=True)
class WireCall:
    url: str
    headers: Dict[str, str]
    body: Dict[str, Any]


class GenerateCapable(Protocol):
    """What callers may rely on from any provider adapter."""

    provider: Provider
    settings: AdapterSettings

    def configure(self, settings: AdapterSettings) -> "GenerateCapable": ...

    def is_ready(self) -> bool: ...

    def generate(self, request: GenerateRequest) -> GenerateResult: ...

    def test_connection(self) -> bool: ...

    def list_available_model_identifiers(self) -> List[str]: ...


class WireAdapter(GenerateCapable, Protocol):
    """Hooks :func:`run_generation` needs on top of the public contract."""

    probe_max_tokens: int

    def probe_model(self) -> str: ...

    def resolve_model(self, requested: str) -> Optional[ModelResolution]: ...

    def build_call(self, model: str, request: GenerateRequest, max_tokens: int) -> WireCall: ...

    def parse_response(self, payload: Any) -> Tuple[str, TokenUsage]: ...


# ---------------------------------------------------------------------------
# Helpers shared by adapters
# ---------------------------------------------------------------------------

def resolve_catalog_model(provider: Provider, requested: str) -> Optional[ModelResolution]:
    """Resolve ``requested`` within ``provider``'s catalog slice.

    Unknown identifiers resolve to the provider default with
    ``substituted=True``. Returns None only when the slice is empty.
    """
    spec = find_for_provider(provider, requested)
    if spec is not None:
        return ModelResolution(spec, requested, spec.api_identifier, substituted=False)
    if not list_models(provider):
        return None
    fallback = default_model(provider)
    return ModelResolution(fallback, requested, fallback.api_identifier, substituted=True)


def _counter(usage: Mapping[str, Any], key: str) -> int:
    value = usage.get(key)
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        LOG.debug("Ignoring non-numeric usage counter %s=%r", key, value)
        return 0


def usage_from(usage: Any, input_key: str, output_key: str, total_key: str) -> TokenUsage:
    """Build :class:`TokenUsage` from a usage mapping.

    Missing, null or non-numeric counters are 0; they never fail the call.
    """
    if not isinstance(usage, Mapping):
        return TokenUsage()
    return TokenUsage(
        input_tokens=_counter(usage, input_key),
        output_tokens=_counter(usage, output_key),
        total_tokens=_counter(usage, total_key),
    )


def header_safe(*values: str) -> bool:
    """True when every value can be sent as an HTTP header (latin-1)."""
    try:
        for value in values:
            value.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return True


def estimate_tokens(text: str) -> int:
    """Rough token estimation (~4 chars per token)."""
    return len(text) // 4


def provider_error_message(response: requests.Response) -> str:
    """Return the provider's own error message from a non-2xx response.

    Understands ``{"error": {"message": ...}}``, ``{"error": "..."}`` and
    ``{"message": ...}`` envelopes; anything else yields the raw body.
    """
    try:
        data = response.json()
    except ValueError:
        data = None

    if isinstance(data, Mapping):
        error = data.get("error")
        if isinstance(error, Mapping) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if isinstance(data.get("message"), str) and data["message"]:
            return data["message"]

    text = response.text or ""
    return text if text else f"HTTP {response.status_code}"


def _clamp_max_tokens(spec: ModelSpec, requested: int) -> int:
    if spec.max_output_tokens and requested > spec.max_output_tokens:
        LOG.debug(
            "Clamping max_output_tokens %d to %d for %s",
            requested, spec.max_output_tokens, spec.api_identifier,
        )
        return spec.max_output_tokens
    return requested


def _warn_if_over_context(spec: ModelSpec, request: GenerateRequest, max_tokens: int) -> None:
    if not spec.context_window:
        return
    prompt_tokens = estimate_tokens(
        request.full_context_text + request.selected_text + request.instructions
    )
    if prompt_tokens + max_tokens > spec.context_window:
        LOG.warning(
            "Estimated %d prompt tokens + %d output tokens exceed the %d-token context of %s",
            prompt_tokens, max_tokens, spec.context_window, spec.api_identifier,
        )


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

def run_generation(adapter: WireAdapter, request: GenerateRequest) -> GenerateResult:
    """Resolve, send once, classify. Never raises."""
    try:
        return _generate(adapter, request)
    except Exception as exc:
        LOG.exception("Unexpected error in %s generation", adapter.provider.value)
        return GenerateResult.failure(
            ErrorKind.MALFORMED_RESPONSE,
            f"Unexpected error from {adapter.provider.value}: {exc}",
            requested_model=request.model_api_identifier,
        )


def _generate(adapter: WireAdapter, request: GenerateRequest) -> GenerateResult:
    provider = adapter.provider.value

    if not adapter.is_ready():
        return GenerateResult.failure(
            ErrorKind.NOT_CONFIGURED,
            f"{provider} is not properly configured",
            requested_model=request.model_api_identifier,
        )

    resolution = adapter.resolve_model(request.model_api_identifier)
    if resolution is None:
        return GenerateResult.failure(
            ErrorKind.INVALID_MODEL,
            f"No valid model found for {provider}",
            requested_model=request.model_api_identifier,
        )
    if resolution.substituted:
        LOG.warning(
            "Model %r is not in the %s catalog; using %r instead",
            resolution.requested, provider, resolution.wire_model,
        )
    fields = resolution.result_fields()

    max_tokens = _clamp_max_tokens(resolution.spec, request.max_output_tokens)
    if not request.is_probe:
        _warn_if_over_context(resolution.spec, request, max_tokens)

    call = adapter.build_call(resolution.wire_model, request, max_tokens)
    LOG.info(
        "Calling %s model=%s probe=%s max_tokens=%d",
        provider, resolution.wire_model, request.is_probe, max_tokens,
    )

    try:
        response = requests.post(
            call.url,
            headers=call.headers,
            json=call.body,
            timeout=adapter.settings.timeout,
        )
    except (requests.exceptions.RequestException, OSError) as exc:
        LOG.warning("%s transport failure: %s", provider, exc)
        return GenerateResult.failure(ErrorKind.TRANSPORT_FAILURE, str(exc), **fields)

    status = response.status_code
    if not 200 <= status < 300:
        message = provider_error_message(response)
        LOG.warning("%s rejected the request (HTTP %d): %s", provider, status, message)
        return GenerateResult.failure(
            ErrorKind.PROVIDER_REJECTED, message, status_code=status, **fields
        )

    try:
        payload = response.json()
    except ValueError:
        return GenerateResult.failure(
            ErrorKind.MALFORMED_RESPONSE,
            f"Invalid response format from {provider}: body is not JSON",
            status_code=status,
            **fields,
        )

    try:
        text, usage = adapter.parse_response(payload)
    except MalformedResponseError as exc:
        LOG.warning("%s returned a malformed response: %s", provider, exc)
        return GenerateResult.failure(
            ErrorKind.MALFORMED_RESPONSE, str(exc), status_code=status, **fields
        )
    except (KeyError, IndexError, TypeError, AttributeError, ValueError) as exc:
        LOG.exception("Unexpected %s response shape", provider)
        return GenerateResult.failure(
            ErrorKind.MALFORMED_RESPONSE,
            f"Invalid response format from {provider}: {exc}",
            status_code=status,
            **fields,
        )

    LOG.info(
        "%s call succeeded: model=%s input_tokens=%d output_tokens=%d",
        provider, resolution.wire_model, usage.input_tokens, usage.output_tokens,
    )
    return GenerateResult.ok(text, usage, status_code=status, **fields)


def run_connection_test(adapter: WireAdapter) -> bool:
    """Send a template-free probe; True iff it succeeds with non-empty text."""
    if not adapter.is_ready():
        LOG.info("%s adapter not ready; skipping connection test", adapter.provider.value)
        return False
    try:
        request = GenerateRequest(
            model_api_identifier=adapter.probe_model(),
            instructions=config.PROBE_PROMPT,
            max_output_tokens=adapter.probe_max_tokens,
            is_probe=True,
        )
        result = adapter.generate(request)
    except Exception:
        LOG.exception("%s connection test failed unexpectedly", adapter.provider.value)
        return False
    return result.succeeded and bool(result.text)


__all__ = [
    "GenerateCapable",
    "MalformedResponseError",
    "ModelResolution",
    "WireAdapter",
    "WireCall",
    "estimate_tokens",
    "header_safe",
    "provider_error_message",
    "resolve_catalog_model",
    "run_connection_test",
    "run_generation",
    "usage_from",
]
