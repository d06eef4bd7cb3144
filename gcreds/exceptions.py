"""gcreds exception hierarchy.

All gcreds-specific exceptions inherit from GCredsException, enabling
catch-all handling while supporting specific error types.
"""

from __future__ import annotations

from typing import Any


class GCredsException(Exception):
    """Base exception for all gcreds errors."""

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize gcreds exception.

        Parameters
        ----------
        message : str
            Human-readable error message.
        **context : Any
            Additional context (provider, status_code, field, etc.).
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Format exception with context."""
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class ConfigurationError(GCredsException):
    """Credentials were constructed with invalid settings."""


class AuthenticationError(GCredsException):
    """Base exception for all authentication failures.

    Raised by the provider layer when a step of an authentication
    flow fails. The flows catch it and collapse it to a failure outcome.
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        **context: Any,
    ) -> None:
        """Initialize authentication error.

        Parameters
        ----------
        message : str
            Human-readable error message.
        provider : str, optional
            The identity provider name (e.g., "Google").
        **context : Any
            Additional context.
        """
        super().__init__(message, provider=provider, **context)
        self.provider = provider


class TransportError(AuthenticationError):
    """Talking to the provider failed at the network level.

    Covers connection errors and client-side timeouts.
    """


class ProviderRejected(AuthenticationError):
    """The provider answered with a non-200 status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        provider: str | None = None,
        **context: Any,
    ) -> None:
        """Initialize provider rejection.

        Parameters
        ----------
        message : str
            Human-readable error message.
        status_code : int
            The HTTP status code returned by the provider.
        provider : str, optional
            The identity provider name.
        **context : Any
            Additional context.
        """
        super().__init__(message, provider=provider, status_code=status_code, **context)
        self.status_code = status_code


class DecodeError(AuthenticationError):
    """A provider response did not match the expected shape.

    Raised for bodies that are not JSON, and for JSON that lacks a
    required field or carries a field of the wrong type.
    """


class MissingCredential(AuthenticationError):
    """The incoming request lacked an authorization code or token."""
