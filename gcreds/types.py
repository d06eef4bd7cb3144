"""Type definitions shared by the gcreds authentication flows.

Outcome values returned by the flows, the generic user profile built
by the redirect flow, and the minimal request interface both flows read.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any, Generic, Protocol, TypeVar


ProfileT = TypeVar("ProfileT")


class OutcomeKind(str, Enum):
    """How a credentials plugin resolved a request."""

    SUCCESS = "success"
    FAILURE = "failure"
    PASS = "pass"
    IN_PROGRESS = "in_progress"


@dataclass(frozen=True)
class AuthOutcome(Generic[ProfileT]):
    """Single result of authenticating one request.

    Attributes
    ----------
    kind : OutcomeKind
        Which of success, failure, pass or in-progress occurred.
    profile : ProfileT or None
        The authenticated profile (success only).
    status : int or None
        HTTP status suggested to the host (failure and pass).
    headers : dict[str, str] or None
        Extra response headers suggested to the host.
    redirect_url : str or None
        Where to send the user agent (in-progress only).
    """

    kind: OutcomeKind
    profile: ProfileT | None = None
    status: int | None = None
    headers: dict[str, str] | None = None
    redirect_url: str | None = None

    @classmethod
    def success(cls, profile: ProfileT) -> AuthOutcome[ProfileT]:
        """Build a success outcome carrying ``profile``."""
        return cls(kind=OutcomeKind.SUCCESS, profile=profile)

    @classmethod
    def failure(
        cls,
        status: int | None = HTTPStatus.UNAUTHORIZED,
        headers: dict[str, str] | None = None,
    ) -> AuthOutcome[Any]:
        """Build a failure outcome (401 unless told otherwise)."""
        return cls(kind=OutcomeKind.FAILURE, status=status, headers=headers)

    @classmethod
    def passed(
        cls,
        status: int | None = None,
        headers: dict[str, str] | None = None,
    ) -> AuthOutcome[Any]:
        """Build a pass-through outcome: this plugin does not apply."""
        return cls(kind=OutcomeKind.PASS, status=status, headers=headers)

    @classmethod
    def in_progress(cls, redirect_url: str) -> AuthOutcome[Any]:
        """Build an in-progress outcome redirecting to ``redirect_url``."""
        return cls(kind=OutcomeKind.IN_PROGRESS, redirect_url=redirect_url)

    @property
    def is_success(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.kind is OutcomeKind.FAILURE

    @property
    def is_pass(self) -> bool:
        return self.kind is OutcomeKind.PASS

    @property
    def is_in_progress(self) -> bool:
        return self.kind is OutcomeKind.IN_PROGRESS


@dataclass(frozen=True)
class UserProfileName:
    """Structured name of an authenticated user."""

    family_name: str
    given_name: str
    middle_name: str = ""


@dataclass(frozen=True)
class UserProfileEmail:
    """An e-mail address and its type label (may be empty)."""

    value: str
    type: str = ""


@dataclass(frozen=True)
class UserProfilePhoto:
    """A URL to a profile picture."""

    value: str


@dataclass(frozen=True)
class UserProfile:
    """Provider-independent profile produced by the redirect flow.

    Attributes
    ----------
    id : str
        The provider-unique subject identifier.
    display_name : str
        Name suitable for display.
    provider : str
        Name of the identity provider, e.g. "Google".
    name : UserProfileName or None
        Structured name, when both family and given names were granted.
    emails : list[UserProfileEmail] or None
        E-mail addresses, when granted.
    photos : list[UserProfilePhoto] or None
        Profile pictures, when granted.
    """

    id: str
    display_name: str
    provider: str
    name: UserProfileName | None = None
    emails: list[UserProfileEmail] | None = field(default=None, hash=False)
    photos: list[UserProfilePhoto] | None = field(default=None, hash=False)


class RequestLike(Protocol):
    """The parts of an incoming request the flows read.

    A Starlette/FastAPI ``Request`` satisfies this protocol.
    """

    @property
    def query_params(self) -> Mapping[str, str]: ...

    @property
    def headers(self) -> Mapping[str, str]: ...
