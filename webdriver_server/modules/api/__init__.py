"""
API Module - Black Box Interface

Purpose: WebDriver response model and protocol error taxonomy
Interface: WebDriverResponse, ErrorCode, WebDriverError subclasses
Hidden: Status code mapping, wire envelope

Every endpoint reports errors through these types instead of picking
status codes on its own.
"""

from .models import (
    HTTP_STATUS_CODES,
    ErrorCode,
    InvalidArgumentError,
    InvalidSessionIdError,
    NavigateRequest,
    NewSessionValue,
    SessionNotCreatedError,
    StatusValue,
    UnableToCaptureScreenError,
    UnknownCommandError,
    UnknownError,
    WebDriverError,
    WebDriverResponse,
)

__all__ = [
    "HTTP_STATUS_CODES",
    "ErrorCode",
    "WebDriverResponse",
    "WebDriverError",
    "SessionNotCreatedError",
    "UnknownCommandError",
    "InvalidArgumentError",
    "InvalidSessionIdError",
    "UnableToCaptureScreenError",
    "UnknownError",
    "NavigateRequest",
    "StatusValue",
    "NewSessionValue",
]
