"""
Custom exceptions for http_streaming_core.

This module defines the exception hierarchy used throughout
the library. Callers can tell a broken connection (TransportError)
from bad compressed data (DecodeError) from a rejected response
(InvalidContentType, HttpStatusError).
"""

from typing import Dict, Optional


class HTTPCoreError(Exception):
    """Base exception for all http_streaming_core errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class TransportError(HTTPCoreError):
    """Raised when the underlying byte stream fails or closes early."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Transport error: {message}", cause)


class ProtocolError(HTTPCoreError):
    """Raised when the response does not follow the HTTP/1.1 wire format."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Protocol error: {message}", cause)


class InvalidContentType(HTTPCoreError):
    """Raised when the response MIME type is not one the client accepts."""

    def __init__(self, content_type: Optional[str]) -> None:
        super().__init__(f"Invalid response MIME type: {content_type}")
        self.content_type = content_type


class HttpStatusError(HTTPCoreError):
    """
    Raised for any response status other than 200.

    The response body has already been drained and discarded
    by the time this is raised.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.headers = dict(headers or {})


class DecodeError(HTTPCoreError):
    """Raised when compressed response data cannot be decoded."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Decode error: {message}", cause)


class StreamError(HTTPCoreError):
    """Raised when there's an error with stream operations."""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        super().__init__(f"Stream error: {message}", cause)
