import logging
from typing import Any, MutableMapping

from balance.errors import ComparisonError

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Please fill in both options to compare."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."

DEFAULT_STATE = {
    "option_a": "",
    "option_b": "",
    "is_loading": False,
    "error": None,
    "result": None,
}


class ComparisonView:
    """
    Form state machine for the comparison screen.

    ``state`` is st.session_state in the app and a plain dict in tests.
    A submit goes through begin() (validation, Idle -> Loading) and then
    resolve() (one client call, Loading -> Success or Failed). The app
    reruns between the two so the inputs render disabled during the call.

    Outside Streamlit, where no widget owns the fields, edit() sets the
    option text and submit() runs both steps in one call.
    """

    def __init__(self, state: MutableMapping[str, Any], client):
        self.state = state
        self.client = client

    def init_state(self):
        for key, value in DEFAULT_STATE.items():
            if key not in self.state:
                self.state[key] = value

    @property
    def option_a(self) -> str:
        return self.state["option_a"]

    @property
    def option_b(self) -> str:
        return self.state["option_b"]

    @property
    def is_loading(self) -> bool:
        return self.state["is_loading"]

    @property
    def error(self):
        return self.state["error"]

    @property
    def result(self):
        return self.state["result"]

    @property
    def has_both_options(self) -> bool:
        return bool(self.option_a.strip()) and bool(self.option_b.strip())

    @property
    def submit_disabled(self) -> bool:
        return self.is_loading or not self.has_both_options

    @property
    def is_idle(self) -> bool:
        return not self.is_loading and self.result is None and self.error is None

    def edit(self, field: str, text: str):
        """Set an option's text; the last result or error stays until the next submit."""
        if field not in ("option_a", "option_b"):
            raise KeyError(field)
        self.state[field] = text

    def begin(self) -> bool:
        if self.is_loading:
            return False
        if not self.has_both_options:
            self.state["error"] = VALIDATION_MESSAGE
            return False

        self.state["error"] = None
        self.state["result"] = None
        self.state["is_loading"] = True
        return True

    def resolve(self):
        try:
            self.state["result"] = self.client.compare(self.option_a, self.option_b)
        except ComparisonError as e:
            self.state["error"] = str(e)
        except Exception:
            logger.exception("Unexpected failure while comparing options")
            self.state["error"] = UNKNOWN_ERROR_MESSAGE
        finally:
            self.state["is_loading"] = False

    def submit(self):
        """begin() and resolve() back to back, for callers without a rerun loop."""
        if self.begin():
            self.resolve()
