"""
Exceptions raised by the restaurant directory client.

Every failure a search can end in is a DirectoryError carrying the
ErrorKind that selects its user-facing message.
"""

from typing import Optional

from .models.status import TRANSPORT_ERROR_KINDS, ErrorKind


class DirectoryError(Exception):
    """Base class for search failures."""

    kind: ErrorKind = ErrorKind.BAD_RESPONSE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(DirectoryError):
    """The postcode was empty once whitespace was removed."""

    kind = ErrorKind.INVALID_INPUT


class TransportError(DirectoryError):
    """The request did not produce a usable HTTP response."""

    def __init__(self, kind: ErrorKind, message: str):
        if kind not in TRANSPORT_ERROR_KINDS:
            raise ValueError(f"Not a transport error kind: {kind}")
        super().__init__(message)
        self.kind = kind


class DecodingError(DirectoryError):
    """The response body did not match the expected schema."""

    kind = ErrorKind.DECODING

    def __init__(self, message: str, field_path: Optional[str] = None):
        if field_path:
            message = f"{message} (at {field_path})"
        super().__init__(message)
        self.field_path = field_path
