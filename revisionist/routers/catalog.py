"""Router for read-only catalog data: models and revision presets."""

from typing import Optional

from fastapi import APIRouter, HTTPException

from revisionist.catalog import all_models, list_models
from revisionist.llm_factory import UnknownProviderError, parse_provider
from revisionist.prompts import SUGGESTION_PROMPTS

router = APIRouter(tags=["catalog"])


@router.get("/models")
def list_models_endpoint(provider: Optional[str] = None):
    """List catalog models, optionally for one provider only."""
    if provider is None:
        models = all_models()
    else:
        try:
            models = list_models(parse_provider(provider))
        except UnknownProviderError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
    return {"models": [spec.to_dict() for spec in models]}


@router.get("/suggestions")
def suggestions_endpoint():
    return {"suggestions": [{"type": s.type, "prompt": s.prompt} for s in SUGGESTION_PROMPTS]}
