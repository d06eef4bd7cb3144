"""Google bearer-token authentication with a typed profile cache.

Requests declare ``X-token-type: GoogleToken`` and carry the token in an
``access_token`` header. The token is verified by fetching the subject's
profile from Google, decoded into the caller's profile type and cached.
"""

# pylint: disable=logging-too-many-args

from __future__ import annotations

import logging

from typing import TYPE_CHECKING, Generic, TypeVar

from ..exceptions import AuthenticationError, ConfigurationError, MissingCredential
from ..log import configure
from ..types import AuthOutcome
from .base import CredentialsPlugin
from .cache import TokenCache, TokenCacheRegistry
from .profiles import GOOGLE, TokenProfile, decode_profile
from .providers import GoogleProvider


if TYPE_CHECKING:
    from ..config import GCredsSettings
    from ..types import RequestLike


logger = logging.getLogger("gcreds.auth")

TOKEN_TYPE_HEADER = "X-token-type"
TOKEN_HEADER = "access_token"  # noqa: S105
GOOGLE_TOKEN_TYPE = "GoogleToken"  # noqa: S105

ProfileT = TypeVar("ProfileT", bound=TokenProfile)


class GoogleTokenCredentials(CredentialsPlugin, Generic[ProfileT]):
    """Authenticate requests carrying a Google OAuth access token.

    Parameters
    ----------
    profile_type : type[TokenProfile]
        The profile shape produced on success.
    cache : TokenCache, optional
        Cache to use. Takes precedence over ``registry``.
    registry : TokenCacheRegistry, optional
        Registry to take this profile type's cache from. When neither
        ``cache`` nor ``registry`` is given, a private cache is created.
    cache_size : int, optional
        Bound for a newly created cache (default ``profile_type.cache_size``).
        Cannot be combined with ``cache``.
    provider : GoogleProvider, optional
        Provider used to fetch profiles.
    token_type : str
        Expected value of the ``X-token-type`` header.

    Raises
    ------
    ConfigurationError
        If both ``cache`` and ``cache_size`` are given.
    """

    def __init__(
        self,
        profile_type: type[ProfileT],
        cache: TokenCache[ProfileT] | None = None,
        registry: TokenCacheRegistry | None = None,
        cache_size: int | None = None,
        provider: GoogleProvider | None = None,
        token_type: str = GOOGLE_TOKEN_TYPE,
    ) -> None:
        """Initialize the token flow."""
        self.profile_type = profile_type
        if cache is not None and cache_size is not None:
            msg = "cache_size cannot be applied to an existing cache"
            raise ConfigurationError(msg, provider=GOOGLE, cache_size=cache_size)
        if cache is None:
            registry = registry or TokenCacheRegistry()
            cache = registry.cache_for(profile_type, max_size=cache_size)
        self.cache = cache
        self.provider = provider or GoogleProvider()
        self.token_type = token_type

    @classmethod
    def from_settings(
        cls,
        profile_type: type[ProfileT],
        settings: GCredsSettings,
        registry: TokenCacheRegistry | None = None,
    ) -> GoogleTokenCredentials[ProfileT]:
        """Create the token flow from gcreds settings.

        Also applies the ``[log]`` section to the gcreds logger.
        """
        configure(settings.log)
        google = settings.google
        return cls(
            profile_type,
            registry=registry,
            cache_size=google.cache_size or None,
            provider=GoogleProvider.from_settings(google),
            token_type=google.token_type,
        )

    @property
    def name(self) -> str:
        return f"{GOOGLE}Token"

    async def authenticate(self, request: RequestLike) -> AuthOutcome[ProfileT]:
        """Authenticate an incoming request using a Google OAuth token.

        Parameters
        ----------
        request : RequestLike
            The incoming request; only its headers are read.

        Returns
        -------
        AuthOutcome[ProfileT]
            Pass when the request does not declare a Google token,
            failure when the token is absent or rejected, otherwise
            success with the (possibly cached) profile.
        """
        headers = request.headers
        if headers.get(TOKEN_TYPE_HEADER) != self.token_type:
            return AuthOutcome.passed()

        token = headers.get(TOKEN_HEADER)
        if not token:
            logger.debug("Google token type declared without an access token")
            return AuthOutcome.failure()

        cached = self.cache.get(token)
        if cached is not None:
            return AuthOutcome.success(cached)

        try:
            profile = await self.fetch_profile(token)
        except AuthenticationError as exc:
            logger.error("Failed to retrieve Google profile for token: %s", exc)
            return AuthOutcome.failure()

        self.cache.put(token, profile)
        return AuthOutcome.success(profile)

    async def fetch_profile(self, token: str) -> ProfileT:
        """Fetch and decode the subject's profile for ``token``.

        Raises
        ------
        MissingCredential
            If ``token`` is empty.
        AuthenticationError
            On transport failure, a non-200 response, or a body that
            cannot be decoded to the profile type.
        """
        if not token:
            msg = "No Google access token supplied"
            raise MissingCredential(msg, provider=GOOGLE)
        payload = await self.provider.get_profile_payload(token)
        return decode_profile(self.profile_type, payload)

    async def close(self) -> None:
        """Close the provider's HTTP client."""
        await self.provider.close()
