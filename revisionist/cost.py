"""Cost estimation from token usage and catalog prices.

All arithmetic is exact ``Decimal``; rounding for display is left to the
caller.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional

from revisionist.catalog import Provider, find_by_api_identifier, find_for_provider
from revisionist.llm_base import TokenUsage

_MILLION = Decimal(1_000_000)


@dataclass(frozen=True)
class CostEstimate:
    input_cost_usd: Decimal
    output_cost_usd: Decimal
    total_cost_usd: Decimal
    model: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "input_cost_usd": float(self.input_cost_usd),
            "output_cost_usd": float(self.output_cost_usd),
            "total_cost_usd": float(self.total_cost_usd),
            "model": self.model,
        }


def estimate_cost(
    usage: TokenUsage,
    model_api_identifier: str,
    provider: Optional[Provider] = None,
) -> Optional[CostEstimate]:
    """Price ``usage`` against the catalog entry for ``model_api_identifier``.

    With ``provider`` the lookup is limited to that provider's models, so a
    locally loaded model named like a hosted one is not priced as it.
    Returns None (not zero) for unknown models and models without published
    pricing, since zero would claim the call was free.
    """
    if provider is None:
        spec = find_by_api_identifier(model_api_identifier)
    else:
        spec = find_for_provider(provider, model_api_identifier)
    if spec is None or not spec.has_pricing:
        return None

    input_cost = Decimal(usage.input_tokens) / _MILLION * spec.input_cost_per_million
    output_cost = Decimal(usage.output_tokens) / _MILLION * spec.output_cost_per_million
    return CostEstimate(
        input_cost_usd=input_cost,
        output_cost_usd=output_cost,
        total_cost_usd=input_cost + output_cost,
        model=spec.api_identifier,
    )


__all__ = ["CostEstimate", "estimate_cost"]
