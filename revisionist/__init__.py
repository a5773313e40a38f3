"""Revisionist: provider-agnostic text revision core.

Modules grouped by responsibility:
- catalog: static model registry (limits, prices, capabilities)
- adapters: one adapter per provider wire protocol
- llm_factory: builds a configured adapter from a provider name
- cost: prices token usage against the catalog
- probe: connectivity checks
- revision: a full revision round trip (generate + cost)
- main: FastAPI app exposing the above over HTTP
"""

__version__ = "0.3.0"
