"""Provider-agnostic request/result types shared by every adapter.

Adapters translate a :class:`GenerateRequest` into their provider's wire
format and always hand back a :class:`GenerateResult`; failures are carried
as an :class:`ErrorKind` tag instead of exceptions so callers never branch
on provider-specific error shapes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from revisionist import config


class ErrorKind(str, Enum):
    """Failure categories surfaced at the adapter boundary."""

    # Missing credential/endpoint; prompt for settings rather than retrying.
    NOT_CONFIGURED = "not_configured"
    # No catalog entry could be resolved for the adapter's provider.
    INVALID_MODEL = "invalid_model"
    # Network, DNS or timeout failure before a response arrived.
    TRANSPORT_FAILURE = "transport_failure"
    # 2xx response whose envelope lacks the expected content.
    MALFORMED_RESPONSE = "malformed_response"
    # Non-2xx status; the provider's message is passed through unmodified.
    PROVIDER_REJECTED = "provider_rejected"


@dataclass
class TokenUsage:
    """Token counts returned alongside generated text."""
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class GenerateRequest:
    """A single generation call.

    ``is_probe`` requests send ``instructions`` as the entire prompt with no
    system directive; they exist only for connectivity checks.
    """

    model_api_identifier: str
    instructions: str
    selected_text: str = ""
    full_context_text: str = ""
    temperature: float = config.DEFAULT_TEMPERATURE
    max_output_tokens: int = config.DEFAULT_MAX_TOKENS
    is_probe: bool = False

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be between 0.0 and 1.0, got {self.temperature}")
        if self.max_output_tokens < 1:
            raise ValueError(f"max_output_tokens must be >= 1, got {self.max_output_tokens}")


@dataclass
class GenerateResult:
    """Normalized outcome of a generation call.

    ``text`` is set iff ``succeeded``; ``error_kind`` and ``error_message``
    are set iff not. ``model_substituted`` is true when the requested model
    was unknown to the provider's catalog and ``model_used`` is the
    provider default that was sent instead.
    """

    succeeded: bool
    text: Optional[str] = None
    usage: Optional[TokenUsage] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    requested_model: str = ""
    model_used: str = ""
    model_substituted: bool = False
    status_code: Optional[int] = None

    @classmethod
    def ok(cls, text: str, usage: TokenUsage, **resolution: Any) -> "GenerateResult":
        return cls(succeeded=True, text=text, usage=usage, **resolution)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, **resolution: Any) -> "GenerateResult":
        return cls(succeeded=False, error_kind=kind, error_message=message, **resolution)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "succeeded": self.succeeded,
            "text": self.text,
            "usage": self.usage.to_dict() if self.usage else None,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "error_message": self.error_message,
            "requested_model": self.requested_model,
            "model_used": self.model_used,
            "model_substituted": self.model_substituted,
            "status_code": self.status_code,
        }


@dataclass(frozen=True)
class AdapterSettings:
    """Credentials and endpoint configuration for one adapter.

    Hosted providers use ``api_key``; the local provider uses ``port`` and
    ``local_model_name``. Frozen: reconfiguring builds a new adapter.
    """

    api_key: str = field(default="", repr=False)
    port: str = config.LMSTUDIO_PORT
    local_model_name: str = config.LMSTUDIO_MODEL
    timeout: float = config.REQUEST_TIMEOUT
    referrer: str = config.REFERRER
    app_name: str = config.APP_NAME


__all__ = [
    "AdapterSettings",
    "ErrorKind",
    "GenerateRequest",
    "GenerateResult",
    "TokenUsage",
]
