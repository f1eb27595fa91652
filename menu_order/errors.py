"""Failure types surfaced to screens as transient notifications."""

from __future__ import annotations


class MenuOrderError(Exception):
    """Base class for every failure the UI knows how to report."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(MenuOrderError):
    """Form input rejected before any request was made."""


class ApiError(MenuOrderError):
    """A request to the ordering API did not succeed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(ApiError):
    """No response was received."""


class AuthenticationError(ApiError):
    """Credentials were rejected or the bearer token is not accepted."""


class SessionExpiredError(AuthenticationError):
    """The locally stored session is missing or past its expiry."""


class ServerError(ApiError):
    """The server answered with an error or with an unusable body."""
