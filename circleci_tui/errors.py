"""Errors raised while talking to the CircleCI API."""

from __future__ import annotations


class ApiError(Exception):
    """Base class for every API failure."""


class NetworkError(ApiError):
    """The request could not reach the server."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Network error: {self.message}"


class HttpError(ApiError):
    """The server answered with an error status."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(status, message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"HTTP error {self.status}: {self.message}"


class ParseError(ApiError):
    """A response could not be decoded."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Parse error: {self.message}"


class ApiTimeout(ApiError):
    """The request took too long."""

    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "Request timeout"