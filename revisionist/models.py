"""Pydantic request models shared across routers."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from revisionist.config import DEFAULT_TEMPERATURE, REVISION_MAX_TOKENS


class ReviseRequest(BaseModel):
    selected_text: str
    instructions: str
    model: Optional[str] = None
    provider: Optional[str] = None
    full_context_text: Optional[str] = ""
    temperature: Optional[float] = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=1.0)
    max_tokens: Optional[int] = Field(default=REVISION_MAX_TOKENS, ge=1)


class ConnectionTestRequest(BaseModel):
    provider: Optional[str] = None
