"""Shared fixtures for the revisionist test suite.

All HTTP traffic goes through ``requests.post``, which tests patch; nothing
here touches the network.
"""
from __future__ import annotations

from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from revisionist.llm_base import AdapterSettings


# ---------------------------------------------------------------------------
# Fake HTTP responses
# ---------------------------------------------------------------------------

def make_response(
    status_code: int = 200,
    json_data: Any = None,
    text: str = "",
    json_error: bool = False,
) -> MagicMock:
    """Build a stand-in for ``requests.Response``."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if json_error:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = json_data
    return resp


def chat_completion(content: Optional[str] = "Revised text.", usage: Any = "default") -> dict:
    """A chat-completions success envelope."""
    body: dict = {"choices": [{"message": {"role": "assistant", "content": content}}]}
    if usage == "default":
        body["usage"] = {"prompt_tokens": 120, "completion_tokens": 30, "total_tokens": 150}
    elif usage is not None:
        body["usage"] = usage
    return body


def sent_json(mock_post: MagicMock) -> dict:
    """The JSON body passed to the last ``requests.post`` call."""
    return mock_post.call_args.kwargs["json"]


def sent_headers(mock_post: MagicMock) -> dict:
    return mock_post.call_args.kwargs["headers"]


@pytest.fixture
def hosted_settings() -> AdapterSettings:
    return AdapterSettings(api_key="sk-test-key", timeout=5.0)


@pytest.fixture
def local_settings() -> AdapterSettings:
    return AdapterSettings(port="5678", local_model_name="qwen2.5-7b-instruct", timeout=5.0)
