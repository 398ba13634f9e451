import logging
import os

GEMINI_API_BASE_URL = os.getenv(
    "GEMINI_API_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/models"
)
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_api_key():
    """
    Read the Gemini key at call time so a missing key only fails on first use.
    """
    return os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
