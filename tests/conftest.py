"""Pytest configuration for the comparison app tests."""

from unittest.mock import MagicMock

import pytest

from balance.schemas import ComparisonResult

FREELANCE_PAYLOAD = (
    '{"itemA": {"name": "Freelance", "pros": ["Flexibility"], "cons": ["No stability"]},'
    ' "itemB": {"name": "Employment", "pros": ["Stability"], "cons": ["Less flexibility"]},'
    ' "conclusion": "Depends on risk tolerance."}'
)


@pytest.fixture
def freelance_payload():
    return FREELANCE_PAYLOAD


@pytest.fixture
def freelance_result():
    return ComparisonResult.model_validate_json(FREELANCE_PAYLOAD)


@pytest.fixture
def fake_llm():
    """GeminiClient stand-in; set .generate.return_value or .side_effect per test."""
    llm = MagicMock()
    llm.generate.return_value = FREELANCE_PAYLOAD
    return llm


@pytest.fixture(autouse=True)
def no_api_key(monkeypatch):
    """Keep a developer's real key out of the tests."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
