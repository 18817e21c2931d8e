"""
Exception types raised by scrucheck.
"""


class ScruCheckError(Exception):
    """Base class for all scrucheck errors."""


class MalformedTokenError(ScruCheckError, ValueError):
    """A line is not a well-formed identifier of the expected format."""

    def __init__(self, message: str, token: bytes = b""):
        super().__init__(message)
        self.token = token


class NoValidRecordError(ScruCheckError):
    """The input ended without a single accepted identifier."""

    def __init__(self, message: str = "no valid ID processed"):
        super().__init__(message)
