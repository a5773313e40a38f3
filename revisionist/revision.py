"""One revision round trip: generate, then price the usage.

The caller supplies the selected text, the author's instructions and
optionally the whole document for context. Failures from the adapter come
back inside the outcome's ``result``; re-running ``revise`` is the retry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from revisionist import config
from revisionist.adapters.base import GenerateCapable
from revisionist.cost import CostEstimate, estimate_cost
from revisionist.llm_base import GenerateRequest, GenerateResult

LOG = logging.getLogger(__name__)


def count_words(text: str) -> int:
    return len(text.split())


@dataclass
class RevisionOutcome:
    original_text: str
    result: GenerateResult
    cost: Optional[CostEstimate] = None
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_text": self.original_text,
            **self.result.to_dict(),
            "cost": self.cost.to_dict() if self.cost else None,
            "warnings": list(self.warnings),
        }


def revise(
    adapter: GenerateCapable,
    selected_text: str,
    instructions: str,
    model: str,
    full_context_text: str = "",
    temperature: float = config.DEFAULT_TEMPERATURE,
    max_output_tokens: int = config.REVISION_MAX_TOKENS,
) -> RevisionOutcome:
    """Revise ``selected_text`` according to ``instructions``.

    Raises ``ValueError`` when there is nothing to revise or the generation
    parameters are out of range; provider failures do not raise.
    """
    if not selected_text or not selected_text.strip():
        raise ValueError("Please select text to revise")

    warnings: List[str] = []
    words = count_words(selected_text)
    if words > config.WORD_LIMIT:
        warnings.append(
            f"Selected text is {words} words. The model may struggle with more than "
            f"{config.WORD_LIMIT} words at once. Consider selecting a smaller portion."
        )

    request = GenerateRequest(
        model_api_identifier=model,
        instructions=instructions,
        selected_text=selected_text,
        full_context_text=full_context_text,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
    )
    result = adapter.generate(request)

    cost = None
    if result.succeeded and result.usage is not None:
        cost = estimate_cost(result.usage, result.model_used, adapter.provider)
    elif not result.succeeded:
        LOG.info("Revision failed (%s): %s", result.error_kind, result.error_message)

    if result.model_substituted:
        warnings.append(
            f"Model '{result.requested_model}' is not available for "
            f"{adapter.provider.value}; used '{result.model_used}' instead."
        )

    return RevisionOutcome(
        original_text=selected_text,
        result=result,
        cost=cost,
        warnings=warnings,
    )


__all__ = ["RevisionOutcome", "count_words", "revise"]
