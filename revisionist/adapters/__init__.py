"""Provider adapters.

Each adapter is an immutable value satisfying
:class:`revisionist.adapters.base.GenerateCapable`. Obtain one through
:func:`revisionist.llm_factory.create_adapter` rather than instantiating
the classes directly.
"""
from revisionist.adapters.base import GenerateCapable
from revisionist.adapters.lmstudio import LMStudioAdapter
from revisionist.adapters.openai_responses import OpenAIResponsesAdapter
from revisionist.adapters.openrouter import OpenRouterAdapter

__all__ = [
    "GenerateCapable",
    "LMStudioAdapter",
    "OpenAIResponsesAdapter",
    "OpenRouterAdapter",
]
