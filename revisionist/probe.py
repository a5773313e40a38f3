"""Connectivity checks for a configured adapter.

A probe goes through ``adapter.test_connection()``, which sends a tiny
template-free prompt, so checking credentials never runs the revision
template.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict

from revisionist.adapters.base import GenerateCapable

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeReport:
    provider: str
    ready: bool
    ok: bool
    message: str
    elapsed_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "ready": self.ready,
            "ok": self.ok,
            "message": self.message,
            "elapsed_ms": round(self.elapsed_ms, 1),
        }


def check_connection(adapter: GenerateCapable) -> ProbeReport:
    """Run the adapter's connection test and describe the outcome."""
    provider = adapter.provider.value

    if not adapter.is_ready():
        return ProbeReport(
            provider=provider,
            ready=False,
            ok=False,
            message=f"{provider} is not properly configured",
        )

    started = time.monotonic()
    ok = adapter.test_connection()
    elapsed_ms = (time.monotonic() - started) * 1000

    if ok:
        message = f"{provider} connection validated successfully"
        LOG.info("%s probe succeeded in %.0f ms", provider, elapsed_ms)
    else:
        message = f"Failed to validate {provider} connection"
        LOG.warning("%s probe failed after %.0f ms", provider, elapsed_ms)

    return ProbeReport(provider=provider, ready=True, ok=ok, message=message, elapsed_ms=elapsed_ms)


__all__ = ["ProbeReport", "check_connection"]
