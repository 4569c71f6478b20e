"""
Search status models and user-facing messages.
"""

from enum import Enum
from typing import Dict


class SearchStatus(Enum):
    """Lifecycle states of a search session."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"
    FAILED = "failed"


class ErrorKind(Enum):
    """Reasons a search can fail."""

    INVALID_INPUT = "invalid_input"
    OFFLINE = "offline"
    TIMEOUT = "timeout"
    BAD_RESPONSE = "bad_response"
    DECODING = "decoding"


TRANSPORT_ERROR_KINDS = frozenset(
    {ErrorKind.OFFLINE, ErrorKind.TIMEOUT, ErrorKind.BAD_RESPONSE}
)

NO_RESTAURANTS_MESSAGE = (
    "Uh-oh, no restaurants nearby :( But maybe it's time for a kitchen adventure?"
)
NO_FILTER_MATCHES_MESSAGE = "No results match your filters"

ERROR_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.INVALID_INPUT: "Please enter a valid postcode",
    ErrorKind.OFFLINE: "No internet connection",
    ErrorKind.TIMEOUT: "Request timed out",
    ErrorKind.BAD_RESPONSE: "Network error occurred",
    ErrorKind.DECODING: "Failed to load restaurants",
}


def message_for_error(kind: ErrorKind) -> str:
    """Get the user-facing message for an error kind."""
    return ERROR_MESSAGES[kind]
