"""Error taxonomy for the WordPress Elementor MCP server.

Every failure a tool can report is a ``WordPressError`` subclass tagged with an
``ErrorKind``. Errors carry the original response payload (when one exists) so
callers can inspect what WordPress actually returned.
"""
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    NOT_INITIALIZED = "not_initialized"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    SECURITY = "security"
    REMOTE_API = "remote_api"
    REQUEST_FAILED = "request_failed"
    NOT_FOUND = "not_found"


class WordPressError(Exception):
    kind: ErrorKind = ErrorKind.REQUEST_FAILED

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind.value!r}, message={self.message!r})"


class ConfigurationError(WordPressError):
    kind = ErrorKind.CONFIGURATION


class NotInitializedError(WordPressError):
    kind = ErrorKind.NOT_INITIALIZED


class ValidationError(WordPressError):
    kind = ErrorKind.VALIDATION


class AuthenticationError(WordPressError):
    kind = ErrorKind.AUTHENTICATION


class SecurityError(WordPressError):
    kind = ErrorKind.SECURITY


class RemoteApiError(WordPressError):
    kind = ErrorKind.REMOTE_API


class RequestFailedError(WordPressError):
    kind = ErrorKind.REQUEST_FAILED


class NotFoundError(WordPressError):
    kind = ErrorKind.NOT_FOUND
