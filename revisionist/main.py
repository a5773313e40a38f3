"""FastAPI app exposing the revision core over HTTP.

Endpoints:
  GET  /                  -> service info
  GET  /models            -> catalog (``?provider=openrouter`` to filter)
  GET  /suggestions       -> canned revision instructions
  POST /revise            -> { "selected_text": "...", "instructions": "...", "model": "..." }
  POST /connection/test   -> { "provider": "openai" }

Run with ``uvicorn revisionist.main:app``.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from revisionist.logging_config import setup_logging
from revisionist.rate_limit import limiter
from revisionist.routers import catalog, connection, revise

setup_logging()
log = logging.getLogger(__name__)

app = FastAPI(title="Revisionist API")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    log.info("Incoming request: %s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception as exc:
        log.exception("Error handling request %s %s: %s", request.method, request.url.path, exc)
        raise
    log.info("Response %s for %s %s", response.status_code, request.method, request.url.path)
    return response


@app.get("/")
async def root():
    return {
        "service": "revisionist",
        "endpoints": [
            {"method": "GET", "path": "/models"},
            {"method": "GET", "path": "/suggestions"},
            {"method": "POST", "path": "/revise"},
            {"method": "POST", "path": "/connection/test"},
        ],
    }


app.include_router(catalog.router)
app.include_router(revise.router)
app.include_router(connection.router)
