"""Router for provider connectivity checks."""

import logging

from fastapi import APIRouter, HTTPException, Request

from revisionist.llm_factory import UnknownProviderError, create_adapter
from revisionist.models import ConnectionTestRequest
from revisionist.probe import check_connection
from revisionist.rate_limit import limiter, PROVIDER_CALL_LIMIT

log = logging.getLogger(__name__)

router = APIRouter(tags=["connection"])


@router.post("/connection/test")
@limiter.limit(PROVIDER_CALL_LIMIT)
def connection_test_endpoint(request: Request, req: ConnectionTestRequest):
    """Send a minimal probe to the provider and report whether it answered."""
    try:
        adapter = create_adapter(req.provider)
    except UnknownProviderError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return check_connection(adapter).to_dict()
