"""Tests for revisionist.adapters.openrouter — OpenRouterAdapter with mocked HTTP.

``requests.post`` is patched in every test so no network access happens.
Covers the shared generation pipeline (fallback, error classification,
usage normalisation) through the OpenRouter wire format.
"""
from __future__ import annotations

from unittest.mock import patch

import pytest
import requests

from revisionist.adapters.openrouter import OPENROUTER_URL, OpenRouterAdapter
from revisionist.catalog import Provider, list_models
from revisionist.llm_base import AdapterSettings, ErrorKind, GenerateRequest
from revisionist.prompts import SYSTEM_PROMPT
from tests.conftest import chat_completion, make_response, sent_headers, sent_json

POST = "revisionist.adapters.base.requests.post"


def _request(**overrides) -> GenerateRequest:
    fields = dict(
        model_api_identifier="anthropic/claude-3.5-sonnet",
        instructions="Make it formal.",
        selected_text="The cat sat.",
        full_context_text="",
        temperature=0.3,
        max_output_tokens=500,
    )
    fields.update(overrides)
    return GenerateRequest(**fields)


@pytest.fixture
def adapter(hosted_settings) -> OpenRouterAdapter:
    return OpenRouterAdapter().configure(hosted_settings)


# =====================================================================
# configure / is_ready
# =====================================================================

class TestConfiguration:

    def test_not_ready_without_key(self):
        assert OpenRouterAdapter().is_ready() is False

    def test_ready_with_key(self, adapter):
        assert adapter.is_ready() is True

    def test_not_ready_with_unsendable_key(self):
        adapter = OpenRouterAdapter().configure(AdapterSettings(api_key="sk-\u2018abc\u2019"))
        assert adapter.is_ready() is False

    def test_not_ready_with_unsendable_app_name(self):
        settings = AdapterSettings(api_key="sk-test-key", app_name="\u4fee\u8ba2")
        assert OpenRouterAdapter().configure(settings).is_ready() is False

    def test_configure_returns_new_adapter(self, adapter):
        updated = adapter.configure(AdapterSettings(api_key="sk-other"))
        assert updated is not adapter
        assert updated.settings.api_key == "sk-other"
        assert adapter.settings.api_key == "sk-test-key"

    def test_configure_is_idempotent(self, hosted_settings):
        base = OpenRouterAdapter()
        assert base.configure(hosted_settings) == base.configure(hosted_settings)

    def test_lists_catalog_models(self, adapter):
        ids = adapter.list_available_model_identifiers()
        assert ids == [spec.api_identifier for spec in list_models(Provider.OPENROUTER)]


# =====================================================================
# Wire format
# =====================================================================

class TestRequestShape:

    @patch(POST)
    def test_headers_and_url(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion())
        adapter.generate(_request())

        assert mock_post.call_args.args[0] == OPENROUTER_URL
        headers = sent_headers(mock_post)
        assert headers["Authorization"] == "Bearer sk-test-key"
        assert headers["Content-Type"] == "application/json"
        assert headers["HTTP-Referer"]
        assert headers["X-Title"] == "Revisionist"

    @patch(POST)
    def test_body_fields(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion())
        adapter.generate(_request())

        body = sent_json(mock_post)
        assert body["model"] == "anthropic/claude-3.5-sonnet"
        assert body["temperature"] == 0.3
        assert body["max_tokens"] == 500
        assert body["stream"] is False

    @patch(POST)
    def test_timeout_forwarded(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion())
        adapter.generate(_request())
        assert mock_post.call_args.kwargs["timeout"] == 5.0

    @patch(POST)
    def test_revision_prompt_order(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion())
        adapter.generate(_request(full_context_text="Once upon a time. The cat sat. The end."))

        messages = sent_json(mock_post)["messages"]
        assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
        user = messages[1]["content"]
        assert messages[1]["role"] == "user"
        assert user.index("Once upon a time.") < user.index("## Text to revise")
        assert user.index("## Text to revise") < user.index("Make it formal.")

    @patch(POST)
    def test_probe_sends_raw_instructions_only(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion("Hello!"))
        adapter.generate(_request(instructions="Hi", selected_text="", is_probe=True))

        messages = sent_json(mock_post)["messages"]
        assert messages == [{"role": "user", "content": "Hi"}]
        assert "ghostwriter" not in str(sent_json(mock_post))
        assert "# MISSION" not in str(sent_json(mock_post))

    @patch(POST)
    def test_max_tokens_clamped_to_model_limit(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion())
        adapter.generate(_request(max_output_tokens=50000))
        assert sent_json(mock_post)["max_tokens"] == 8192


# =====================================================================
# Model resolution
# =====================================================================

class TestModelFallback:

    @patch(POST)
    def test_known_model_not_substituted(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion())
        result = adapter.generate(_request())
        assert result.model_substituted is False
        assert result.model_used == "anthropic/claude-3.5-sonnet"

    @patch(POST)
    def test_unknown_model_falls_back_to_default(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion())
        result = adapter.generate(_request(model_api_identifier="anthropic/claude-9"))

        assert result.succeeded
        assert result.model_substituted is True
        assert result.requested_model == "anthropic/claude-9"
        assert result.model_used == "anthropic/claude-3.5-haiku"
        assert sent_json(mock_post)["model"] == "anthropic/claude-3.5-haiku"

    @patch(POST)
    def test_other_providers_model_is_substituted(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion())
        result = adapter.generate(_request(model_api_identifier="gpt-4o"))
        assert result.model_substituted is True


# =====================================================================
# Success parsing
# =====================================================================

class TestSuccess:

    @patch(POST)
    def test_text_and_usage(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion("The feline was seated."))
        result = adapter.generate(_request())

        assert result.succeeded is True
        assert result.text == "The feline was seated."
        assert result.usage.input_tokens == 120
        assert result.usage.output_tokens == 30
        assert result.usage.total_tokens == 150
        assert result.error_kind is None

    @patch(POST)
    def test_text_not_trimmed(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion("  spaced out \n"))
        assert adapter.generate(_request()).text == "  spaced out \n"

    @patch(POST)
    def test_missing_usage_yields_zeros(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion(usage=None))
        result = adapter.generate(_request())
        assert result.succeeded
        assert result.usage.to_dict() == {"input_tokens": 0, "output_tokens": 0, "total_tokens": 0}

    @patch(POST)
    def test_null_counters_yield_zero(self, mock_post, adapter):
        usage = {"prompt_tokens": 7, "completion_tokens": None}
        mock_post.return_value = make_response(json_data=chat_completion(usage=usage))
        result = adapter.generate(_request())
        assert result.usage.input_tokens == 7
        assert result.usage.output_tokens == 0
        assert result.usage.total_tokens == 0

    @patch(POST)
    def test_non_numeric_counter_yields_zero(self, mock_post, adapter):
        usage = {"prompt_tokens": "n/a", "completion_tokens": "12", "total_tokens": {"x": 1}}
        mock_post.return_value = make_response(json_data=chat_completion("Kept.", usage=usage))
        result = adapter.generate(_request())
        assert result.succeeded is True
        assert result.text == "Kept."
        assert result.usage.to_dict() == {"input_tokens": 0, "output_tokens": 12, "total_tokens": 0}


# =====================================================================
# Failure classification
# =====================================================================

class TestFailures:

    def test_not_configured_makes_no_call(self):
        with patch(POST) as mock_post:
            result = OpenRouterAdapter().generate(_request())
        assert result.succeeded is False
        assert result.error_kind is ErrorKind.NOT_CONFIGURED
        mock_post.assert_not_called()

    def test_curly_quote_in_key_does_not_raise(self):
        adapter = OpenRouterAdapter().configure(AdapterSettings(api_key="sk-\u2018abc\u2019"))
        with patch(POST) as mock_post:
            result = adapter.generate(_request())
        assert result.error_kind is ErrorKind.NOT_CONFIGURED
        mock_post.assert_not_called()

    @patch(POST)
    def test_unexpected_send_error_is_tagged(self, mock_post, adapter):
        mock_post.side_effect = UnicodeEncodeError("latin-1", "\u2018", 0, 1, "ordinal not in range(256)")
        result = adapter.generate(_request())
        assert result.succeeded is False
        assert result.error_kind is ErrorKind.MALFORMED_RESPONSE
        assert result.requested_model == "anthropic/claude-3.5-sonnet"

    @patch(POST)
    def test_unexpected_runtime_error_is_tagged(self, mock_post, adapter):
        mock_post.side_effect = RuntimeError("boom")
        result = adapter.generate(_request())
        assert result.error_kind is ErrorKind.MALFORMED_RESPONSE
        assert "boom" in result.error_message

    @patch(POST)
    def test_connection_refused(self, mock_post, adapter):
        mock_post.side_effect = requests.exceptions.ConnectionError("Connection refused")
        result = adapter.generate(_request())
        assert result.succeeded is False
        assert result.error_kind is ErrorKind.TRANSPORT_FAILURE
        assert "Connection refused" in result.error_message
        assert mock_post.call_count == 1

    @patch(POST)
    def test_timeout(self, mock_post, adapter):
        mock_post.side_effect = requests.exceptions.Timeout("read timed out")
        result = adapter.generate(_request())
        assert result.error_kind is ErrorKind.TRANSPORT_FAILURE

    @patch(POST)
    def test_builtin_connection_error(self, mock_post, adapter):
        mock_post.side_effect = ConnectionError("reset by peer")
        assert adapter.generate(_request()).error_kind is ErrorKind.TRANSPORT_FAILURE

    @patch(POST)
    def test_provider_message_propagated_unmodified(self, mock_post, adapter):
        mock_post.return_value = make_response(
            status_code=402,
            json_data={"error": {"message": "Insufficient credits. Add more at openrouter.ai", "code": 402}},
        )
        result = adapter.generate(_request())
        assert result.error_kind is ErrorKind.PROVIDER_REJECTED
        assert result.error_message == "Insufficient credits. Add more at openrouter.ai"
        assert result.status_code == 402

    @patch(POST)
    def test_rejection_with_plain_text_body(self, mock_post, adapter):
        mock_post.return_value = make_response(status_code=502, text="Bad Gateway", json_error=True)
        result = adapter.generate(_request())
        assert result.error_kind is ErrorKind.PROVIDER_REJECTED
        assert result.error_message == "Bad Gateway"

    @patch(POST)
    def test_rejection_with_empty_body(self, mock_post, adapter):
        mock_post.return_value = make_response(status_code=500, text="", json_error=True)
        assert adapter.generate(_request()).error_message == "HTTP 500"

    @patch(POST)
    def test_missing_content_is_malformed(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data={"choices": []})
        result = adapter.generate(_request())
        assert result.error_kind is ErrorKind.MALFORMED_RESPONSE
        assert result.text is None

    @patch(POST)
    def test_empty_content_is_malformed(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion(content=""))
        assert adapter.generate(_request()).error_kind is ErrorKind.MALFORMED_RESPONSE

    @patch(POST)
    def test_non_json_success_is_malformed(self, mock_post, adapter):
        mock_post.return_value = make_response(status_code=200, text="<html>", json_error=True)
        assert adapter.generate(_request()).error_kind is ErrorKind.MALFORMED_RESPONSE

    @patch(POST)
    def test_no_retry_on_failure(self, mock_post, adapter):
        mock_post.return_value = make_response(status_code=503, json_data={"error": "overloaded"})
        result = adapter.generate(_request())
        assert result.error_message == "overloaded"
        assert mock_post.call_count == 1


# =====================================================================
# test_connection
# =====================================================================

class TestConnection:

    def test_not_ready_returns_false_without_call(self):
        with patch(POST) as mock_post:
            assert OpenRouterAdapter().test_connection() is False
        mock_post.assert_not_called()

    @patch(POST)
    def test_success(self, mock_post, adapter):
        mock_post.return_value = make_response(json_data=chat_completion("Hello!"))
        assert adapter.test_connection() is True
        body = sent_json(mock_post)
        assert body["messages"] == [{"role": "user", "content": "Hi"}]
        assert body["max_tokens"] == 10

    @patch(POST)
    def test_rejected_key(self, mock_post, adapter):
        mock_post.return_value = make_response(status_code=401, json_data={"error": {"message": "No auth"}})
        assert adapter.test_connection() is False

    @patch(POST)
    def test_transport_failure(self, mock_post, adapter):
        mock_post.side_effect = requests.exceptions.ConnectionError("down")
        assert adapter.test_connection() is False
