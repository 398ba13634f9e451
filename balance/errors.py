ANALYSIS_FAILED_PREFIX = "Could not obtain the analysis"
GENERIC_FAILURE_MESSAGE = (
    f"{ANALYSIS_FAILED_PREFIX}. Check your connection or try again later."
)


class ComparisonError(Exception):
    """Base class for comparison failures. str() is the banner text."""


class MissingCredentialError(ComparisonError):
    def __init__(self, message="The GEMINI_API_KEY environment variable is not set."):
        super().__init__(message)


class RequestFailedError(ComparisonError):
    @classmethod
    def from_detail(cls, detail: str = ""):
        if not detail:
            return cls(GENERIC_FAILURE_MESSAGE)
        return cls(f"{ANALYSIS_FAILED_PREFIX}: {detail}")


class ResponseFormatError(RequestFailedError):
    """The payload was not JSON shaped like a ComparisonResult."""


class EmptyResponseError(ComparisonError):
    def __init__(self):
        super().__init__(
            f"{ANALYSIS_FAILED_PREFIX}: the API did not return a text response."
        )
