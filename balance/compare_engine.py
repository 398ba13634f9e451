import logging
from typing import Optional

import requests
from pydantic import ValidationError

from balance.config import get_api_key
from balance.errors import EmptyResponseError, MissingCredentialError, RequestFailedError, ResponseFormatError
from balance.llm_client import GeminiClient, describe_http_error
from balance.schemas import ComparisonRequest, ComparisonResult, response_schema

logger = logging.getLogger(__name__)

SYSTEM_COMPARE = """
You are an impartial analyst and an expert in comparisons.
Your task is to analyse two options given by the user.

- List the pros and cons of each option concisely, as short bullet-style items.
- Finish with a balanced conclusion that sums up the comparison and says which
  option may be the better fit, and in what context.
- Clearly identify and name each option in your answer.
"""

COMPARISON_SCHEMA = response_schema(ComparisonResult)


def build_prompt(request: ComparisonRequest) -> str:
    return (
        "Compare the following two options in detail:\n\n"
        f'Option A: "{request.option_a}"\n\n'
        f'Option B: "{request.option_b}"'
    )


class ComparisonClient:
    """
    Turns two options into a ComparisonResult with a single Gemini call.

    The Gemini handle is built on the first compare() and reused afterwards,
    so a missing API key surfaces on first use rather than at startup.
    """

    def __init__(self, llm: Optional[GeminiClient] = None):
        self._llm = llm

    @property
    def llm(self) -> GeminiClient:
        if self._llm is None:
            self._llm = GeminiClient(api_key=get_api_key())
        return self._llm

    def compare(self, option_a: str, option_b: str) -> ComparisonResult:
        request = ComparisonRequest(option_a=option_a, option_b=option_b)
        try:
            raw = self.llm.generate(build_prompt(request), SYSTEM_COMPARE, COMPARISON_SCHEMA)
        except MissingCredentialError:
            logger.error("Gemini API key is not configured")
            raise
        except requests.HTTPError as e:
            logger.error("Gemini API HTTP error: %s", e)
            raise RequestFailedError.from_detail(describe_http_error(e)) from e
        except (requests.RequestException, ValueError) as e:
            logger.error("Gemini API request failed: %s", e)
            raise RequestFailedError.from_detail(str(e)) from e

        if not raw:
            logger.error("Gemini API returned no text")
            raise EmptyResponseError()

        return parse_result(raw)


def parse_result(raw: str) -> ComparisonResult:
    try:
        return ComparisonResult.model_validate_json(raw.strip())
    except ValidationError as e:
        logger.error("Malformed comparison payload: %s", e)
        raise ResponseFormatError.from_detail(
            f"the response did not match the expected format ({e.error_count()} error(s))"
        ) from e
