"""Tests for ComparisonClient."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from balance.compare_engine import COMPARISON_SCHEMA, SYSTEM_COMPARE, ComparisonClient, build_prompt
from balance.errors import (
    GENERIC_FAILURE_MESSAGE,
    ComparisonError,
    EmptyResponseError,
    MissingCredentialError,
    RequestFailedError,
    ResponseFormatError,
)
from balance.llm_client import GeminiClient
from balance.schemas import ComparisonRequest, response_schema


def test_prompt_names_both_options():
    prompt = build_prompt(ComparisonRequest(option_a="Freelance", option_b="Employment"))
    assert 'Option A: "Freelance"' in prompt
    assert 'Option B: "Employment"' in prompt


def test_system_instruction_asks_for_pros_cons_and_conclusion():
    text = SYSTEM_COMPARE.lower()
    assert "impartial" in text
    assert "pros and cons" in text
    assert "conclusion" in text
    assert "name each option" in text


def test_schema_is_derived_from_result():
    assert COMPARISON_SCHEMA == response_schema()


def test_compare_success(fake_llm):
    client = ComparisonClient(llm=fake_llm)

    result = client.compare("Freelance", "Employment")

    assert result.item_a.name == "Freelance"
    assert result.item_b.pros == ("Stability",)
    assert result.conclusion == "Depends on risk tolerance."
    fake_llm.generate.assert_called_once()
    prompt, system, schema = fake_llm.generate.call_args.args
    assert "Freelance" in prompt and "Employment" in prompt
    assert system == SYSTEM_COMPARE
    assert schema == COMPARISON_SCHEMA


def test_compare_strips_whitespace_around_payload(fake_llm, freelance_payload):
    fake_llm.generate.return_value = f"\n  {freelance_payload}  \n"
    assert ComparisonClient(llm=fake_llm).compare("a", "b").item_a.name == "Freelance"


@pytest.mark.parametrize("payload", [None, ""])
def test_empty_response(fake_llm, payload):
    fake_llm.generate.return_value = payload

    with pytest.raises(EmptyResponseError) as exc:
        ComparisonClient(llm=fake_llm).compare("a", "b")

    assert "did not return a text response" in str(exc.value)
    assert str(exc.value).startswith("Could not obtain the analysis")


def test_network_failure_keeps_message(fake_llm):
    fake_llm.generate.side_effect = requests.ConnectionError("timeout")

    with pytest.raises(RequestFailedError) as exc:
        ComparisonClient(llm=fake_llm).compare("a", "b")

    assert "timeout" in str(exc.value)
    assert not isinstance(exc.value, ResponseFormatError)


def test_failure_without_message_uses_generic_text(fake_llm):
    fake_llm.generate.side_effect = requests.ConnectionError()

    with pytest.raises(RequestFailedError) as exc:
        ComparisonClient(llm=fake_llm).compare("a", "b")

    assert str(exc.value) == GENERIC_FAILURE_MESSAGE


def test_http_error_uses_provider_message(fake_llm):
    resp = MagicMock()
    resp.json.return_value = {"error": {"message": "API key not valid. Please pass a valid API key."}}
    fake_llm.generate.side_effect = requests.HTTPError("400 Client Error", response=resp)

    with pytest.raises(RequestFailedError, match="API key not valid"):
        ComparisonClient(llm=fake_llm).compare("a", "b")


@pytest.mark.parametrize(
    "payload",
    [
        "not json at all",
        '{"itemA": {"name": "A", "pros": [], "cons": []}, "itemB": {"name": "B", "pros": [], "cons": []}}',
        '{"itemA": "A", "itemB": "B", "conclusion": "c"}',
    ],
)
def test_malformed_payload_is_a_format_error(fake_llm, payload):
    fake_llm.generate.return_value = payload

    with pytest.raises(ResponseFormatError) as exc:
        ComparisonClient(llm=fake_llm).compare("a", "b")

    assert isinstance(exc.value, RequestFailedError)
    assert str(exc.value).startswith("Could not obtain the analysis:")


class TestLazyHandle:
    def test_missing_key_fails_on_first_use_not_construction(self):
        client = ComparisonClient()

        with pytest.raises(MissingCredentialError) as exc:
            client.compare("a", "b")

        assert isinstance(exc.value, ComparisonError)
        assert "GEMINI_API_KEY" in str(exc.value)

    def test_handle_built_once_and_reused(self, monkeypatch, freelance_payload):
        monkeypatch.setenv("GEMINI_API_KEY", "test-key")
        client = ComparisonClient()

        with patch.object(GeminiClient, "generate", return_value=freelance_payload) as generate:
            client.compare("a", "b")
            first = client.llm
            client.compare("c", "d")

        assert client.llm is first
        assert first.api_key == "test-key"
        assert generate.call_count == 2

    def test_legacy_key_name(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "legacy-key")
        assert ComparisonClient().llm.api_key == "legacy-key"
