"""Google web login using the OAuth2 authorization-code grant.

Each request either starts the flow (redirect to Google) or finishes it
(``code`` in the query): the code is exchanged for an access token, the
token for the subject's userinfo, and the userinfo becomes a UserProfile.
"""

# pylint: disable=logging-too-many-args

from __future__ import annotations

import logging

from typing import TYPE_CHECKING

from ..exceptions import AuthenticationError, ConfigurationError
from ..log import configure
from ..types import AuthOutcome, UserProfile
from .base import CredentialsPlugin
from .profiles import GOOGLE, create_user_profile
from .providers import GoogleProvider


if TYPE_CHECKING:
    from ..config import GCredsSettings
    from ..types import RequestLike


logger = logging.getLogger("gcreds.auth")


class GoogleCredentials(CredentialsPlugin):
    """Authentication using Google web login with OAuth.

    Parameters
    ----------
    client_id : str
        The client ID from the Google developer console.
    client_secret : str
        The client secret from the Google developer console.
    callback_url : str
        The URL that Google redirects back to.
    scope : str
        Space-separated scopes to request (default "profile").
    provider : GoogleProvider, optional
        Provider to use instead of one built from the arguments above.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        callback_url: str,
        scope: str = "profile",
        provider: GoogleProvider | None = None,
    ) -> None:
        """Initialize the redirect flow."""
        if not callback_url:
            msg = "callback_url is required for Google web login"
            raise ConfigurationError(msg, provider=GOOGLE)
        self.callback_url = callback_url
        self.provider = provider or GoogleProvider(
            client_id=client_id,
            client_secret=client_secret,
            scope=scope,
        )

    @classmethod
    def from_settings(cls, settings: GCredsSettings) -> GoogleCredentials:
        """Create the redirect flow from gcreds settings.

        Also applies the ``[log]`` section to the gcreds logger.
        """
        configure(settings.log)
        google = settings.google
        logger.debug("Google web login configured: %s", settings.redacted()["google"])
        return cls(
            client_id=google.client_id,
            client_secret=google.client_secret,
            callback_url=google.callback_url,
            scope=google.scope,
            provider=GoogleProvider.from_settings(google),
        )

    @property
    def name(self) -> str:
        return GOOGLE

    @property
    def redirecting(self) -> bool:
        return True

    @property
    def login_url(self) -> str:
        """The Google authorization URL users are sent to."""
        return self.provider.build_authorize_url(self.callback_url)

    async def authenticate(self, request: RequestLike) -> AuthOutcome[UserProfile]:
        """Authenticate an incoming request using Google web login.

        Parameters
        ----------
        request : RequestLike
            The incoming request; only its query parameters are read.

        Returns
        -------
        AuthOutcome[UserProfile]
            In-progress with the login URL when no ``code`` is present,
            otherwise success with the subject's profile or failure.
        """
        query = request.query_params

        error = query.get("error")
        if error:
            logger.warning("Google login was not completed: %s", error)
            return AuthOutcome.failure()

        code = query.get("code")
        if not code:
            return AuthOutcome.in_progress(self.login_url)

        try:
            token = await self.provider.exchange_code(code, self.callback_url)
            userinfo = await self.provider.get_userinfo(token)
            profile = create_user_profile(userinfo, provider=self.name)
        except AuthenticationError as exc:
            logger.error("Google web login failed: %s", exc)
            return AuthOutcome.failure()

        logger.debug("Google web login succeeded for subject %s", profile.id)
        return AuthOutcome.success(profile)

    async def close(self) -> None:
        """Close the provider's HTTP client."""
        await self.provider.close()
