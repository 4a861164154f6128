"""
WebDriver response and request models.

These models define the structure of everything that crosses the wire
between a WebDriver client and the server.  Response values and error codes
follow the W3C WebDriver spec: https://www.w3.org/TR/webdriver2/
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field

# Enums


class ErrorCode(str, Enum):
    """W3C WebDriver error codes supported by this server."""

    SESSION_NOT_CREATED = "session not created"
    UNKNOWN_COMMAND = "unknown command"
    INVALID_ARGUMENT = "invalid argument"
    INVALID_SESSION_ID = "invalid session id"
    UNABLE_TO_CAPTURE_SCREEN = "unable to capture screen"
    UNKNOWN_ERROR = "unknown error"


# https://www.w3.org/TR/webdriver2/#errors
HTTP_STATUS_CODES: Dict[ErrorCode, int] = {
    ErrorCode.SESSION_NOT_CREATED: 500,
    ErrorCode.UNKNOWN_COMMAND: 404,
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.INVALID_SESSION_ID: 404,
    ErrorCode.UNABLE_TO_CAPTURE_SCREEN: 500,
    ErrorCode.UNKNOWN_ERROR: 500,
}


# Responses


@dataclass(frozen=True)
class WebDriverResponse:
    """
    A WebDriver response: a value and the HTTP status code to send it with.

    The value is usually an object, but occasionally a string.  Its exact
    format depends on the command being answered.
    """

    value: Any
    http_status_code: int = 200

    @classmethod
    def success(cls, value: Any) -> "WebDriverResponse":
        """A successful response, with HTTP status 200 (OK)."""
        return cls(value=value, http_status_code=200)

    @classmethod
    def error(cls, code: ErrorCode) -> "WebDriverResponse":
        """An error response.  Never carries details beyond the error code."""
        return cls(value={"error": code.value}, http_status_code=HTTP_STATUS_CODES[code])

    @property
    def is_error(self) -> bool:
        return self.http_status_code != 200

    def to_wire(self) -> Dict[str, Any]:
        """All WebDriver responses are spec'd to come inside {value: ...}."""
        return {"value": self.value}


# Errors raised by backends


class WebDriverError(Exception):
    """
    Base class for protocol errors raised by backends.

    The dispatcher turns these into the matching error response.  Anything
    else raised by a handler is treated as an internal fault.
    """

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(self):
        super().__init__(self.code.value)

    @property
    def response(self) -> WebDriverResponse:
        return WebDriverResponse.error(self.code)


class SessionNotCreatedError(WebDriverError):
    code = ErrorCode.SESSION_NOT_CREATED


class UnknownCommandError(WebDriverError):
    code = ErrorCode.UNKNOWN_COMMAND


class InvalidArgumentError(WebDriverError):
    code = ErrorCode.INVALID_ARGUMENT


class InvalidSessionIdError(WebDriverError):
    code = ErrorCode.INVALID_SESSION_ID


class UnableToCaptureScreenError(WebDriverError):
    code = ErrorCode.UNABLE_TO_CAPTURE_SCREEN


class UnknownError(WebDriverError):
    code = ErrorCode.UNKNOWN_ERROR


# Request Models (API Input)


class NavigateRequest(BaseModel):
    """Body of a navigate-to command."""

    url: str = Field(..., description="URL to navigate to", min_length=1)


# Response payloads (API Output)


class StatusValue(BaseModel):
    """Value of a status response."""

    ready: bool
    message: str


class NewSessionValue(BaseModel):
    """Value of a new-session response."""

    sessionId: str
    # Meant to describe the device, but clients do not rely on it in practice.
    capabilities: Dict[str, Any] = Field(default_factory=dict)
