"""Base credentials plugin interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from ..types import AuthOutcome, RequestLike


class CredentialsPlugin(ABC):
    """Abstract base class for credentials plugins.

    A host tries its plugins in order and stops at the first outcome
    that is not a pass.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Plugin identifier (e.g., 'Google')."""
        ...

    @property
    def redirecting(self) -> bool:
        """Whether the plugin sends the user agent to a login page."""
        return False

    @abstractmethod
    async def authenticate(self, request: RequestLike) -> AuthOutcome[Any]:
        """Authenticate one incoming request.

        Parameters
        ----------
        request : RequestLike
            The incoming request (query parameters and headers).

        Returns
        -------
        AuthOutcome
            Exactly one of success, failure, pass or in-progress.
        """
        ...

    async def close(self) -> None:
        """Release network resources. Optional for stateless plugins."""
        return None
