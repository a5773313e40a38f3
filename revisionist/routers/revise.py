"""Router for the revise endpoint (one provider call per request)."""

import logging

from fastapi import APIRouter, HTTPException, Request

from revisionist.catalog import default_model
from revisionist.config import DEFAULT_TEMPERATURE, REVISION_MAX_TOKENS
from revisionist.llm_factory import create_adapter
from revisionist.models import ReviseRequest
from revisionist.rate_limit import limiter, PROVIDER_CALL_LIMIT
from revisionist.revision import revise

log = logging.getLogger(__name__)

router = APIRouter(tags=["revise"])


@router.post("/revise")
@limiter.limit(PROVIDER_CALL_LIMIT)
def revise_endpoint(request: Request, req: ReviseRequest):
    """Revise the selected text with the configured (or requested) provider.

    Provider failures are returned in the body with ``succeeded=false`` so
    the client can show ``error_message`` and offer a retry.
    """
    try:
        adapter = create_adapter(req.provider)
        outcome = revise(
            adapter,
            selected_text=req.selected_text,
            instructions=req.instructions,
            model=req.model or default_model(adapter.provider).api_identifier,
            full_context_text=req.full_context_text or "",
            temperature=req.temperature if req.temperature is not None else DEFAULT_TEMPERATURE,
            max_output_tokens=req.max_tokens or REVISION_MAX_TOKENS,
        )
        return outcome.to_dict()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        log.exception("Error in revise endpoint")
        raise HTTPException(status_code=500, detail=str(exc))
