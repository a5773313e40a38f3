"""Per-IP quotas for the HTTP surface.

Every route gets ``RATE_LIMIT_DEFAULT``. Routes that end in a provider
call (``/revise``, ``/connection/test``) are decorated with
``PROVIDER_CALL_LIMIT`` since each hit spends tokens or credits.
"""
from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from revisionist import config

DEFAULT_LIMIT: str = config.RATE_LIMIT_DEFAULT
PROVIDER_CALL_LIMIT: str = config.RATE_LIMIT_PROVIDER

limiter = Limiter(key_func=get_remote_address, default_limits=[DEFAULT_LIMIT])

__all__ = ["limiter", "DEFAULT_LIMIT", "PROVIDER_CALL_LIMIT"]
