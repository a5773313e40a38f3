"""Centralized configuration for the revision core.

Every setting is read from the environment once at import time. A ``.env``
file at the project root is loaded first so API keys can live there during
local development.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(env_path)

# Provider selection
DEFAULT_PROVIDER = os.getenv("REVISIONIST_PROVIDER", "openrouter").lower().strip()

# Credentials (hosted providers)
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY", "")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

# Local inference (LM Studio)
LMSTUDIO_PORT = os.getenv("LMSTUDIO_PORT", "1234")
LMSTUDIO_MODEL = os.getenv("LMSTUDIO_MODEL", "default")

# Transport
REQUEST_TIMEOUT = float(os.getenv("REVISIONIST_REQUEST_TIMEOUT", "120"))

# Attribution headers sent to OpenRouter
REFERRER = os.getenv("REVISIONIST_REFERRER", "https://www.synapticlabs.ai")
APP_NAME = os.getenv("REVISIONIST_APP_NAME", "Revisionist")

# Generation defaults
DEFAULT_TEMPERATURE = float(os.getenv("DEFAULT_TEMPERATURE", "0.7"))
DEFAULT_MAX_TOKENS = int(os.getenv("DEFAULT_MAX_TOKENS", "1000"))
REVISION_MAX_TOKENS = int(os.getenv("REVISION_MAX_TOKENS", "4096"))

# Connectivity probe
PROBE_PROMPT = "Hi"
PROBE_MAX_TOKENS = 10

# Selections longer than this trigger a warning (the request still runs)
WORD_LIMIT = int(os.getenv("WORD_LIMIT", "800"))

# HTTP surface quotas (per client IP)
RATE_LIMIT_DEFAULT = os.getenv("RATE_LIMIT_DEFAULT", "60/minute")
RATE_LIMIT_PROVIDER = os.getenv("RATE_LIMIT_PROVIDER", "10/minute")

# Logging (see logging_config.setup_logging)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").lower()
