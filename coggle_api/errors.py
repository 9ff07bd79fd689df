"""
Error types raised by the Coggle API client.

All errors derive from CoggleError so callers can catch the whole family:
- ConfigurationError: the client cannot be constructed (missing token)
- ValidationError: input rejected before any request is sent
- RequestError: the server answered with a non-success status, the
  transport failed, or the response did not match the resource schema
"""

from typing import Optional


class CoggleError(Exception):
    """Base class for all Coggle API client errors."""


class ConfigurationError(CoggleError):
    """Raised when the client is missing required configuration."""


class ValidationError(CoggleError):
    """Raised when client-side validation of an argument fails.

    `fields` names every offending field, in the order they were checked.
    """

    def __init__(self, message: str, fields: Optional[list[str]] = None):
        super().__init__(message)
        self.fields = fields or []


class RequestError(CoggleError):
    """Raised when a request to the Coggle API fails.

    status_code is None when the request never produced a response
    (connection refused, timeout, ...).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        description: Optional[str] = None,
        method: Optional[str] = None,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.description = description
        self.method = method
        self.endpoint = endpoint

    def wrap(self, prefix: str) -> "RequestError":
        """Return a copy of this error with `prefix` prepended to the message."""
        return RequestError(
            f"{prefix}: {self}",
            status_code=self.status_code,
            description=self.description,
            method=self.method,
            endpoint=self.endpoint,
        )
