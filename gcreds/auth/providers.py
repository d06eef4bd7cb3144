"""Google OAuth2 endpoints and the outbound calls made to them.

GoogleProvider owns a shared httpx.AsyncClient and exposes the three
operations the flows need: building the authorization URL, exchanging
an authorization code for an access token, and fetching userinfo.
"""

# pylint: disable=logging-too-many-args

from __future__ import annotations

import logging

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

import httpx

from ..exceptions import DecodeError, MissingCredential, ProviderRejected, TransportError
from .profiles import GOOGLE


if TYPE_CHECKING:
    from ..config import GoogleSettings


logger = logging.getLogger("gcreds.auth")

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URL = "https://accounts.google.com/o/oauth2/token"  # noqa: S105
USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"
TOKEN_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"


class GoogleProvider:
    """Google OAuth2 provider with preset endpoints.

    Parameters
    ----------
    client_id : str
        Google OAuth2 client ID.
    client_secret : str
        Google OAuth2 client secret.
    scope : str
        Space-separated scopes requested at authorization (default "profile").
    authorize_url : str
        The authorization endpoint users are redirected to.
    token_url : str
        The token exchange endpoint.
    userinfo_url : str
        The OpenID userinfo endpoint (v3, ``sub`` identifies the subject).
    token_userinfo_url : str
        The legacy userinfo endpoint (v2, ``id`` identifies the subject)
        used to verify bearer tokens.
    timeout : float
        Timeout in seconds applied to every request.
    """

    name = GOOGLE

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        scope: str = "profile",
        authorize_url: str = AUTHORIZE_URL,
        token_url: str = TOKEN_URL,
        userinfo_url: str = USERINFO_URL,
        token_userinfo_url: str = TOKEN_USERINFO_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize Google provider."""
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope
        self.authorize_url = authorize_url
        self.token_url = token_url
        self.userinfo_url = userinfo_url
        self.token_userinfo_url = token_userinfo_url
        self.timeout = timeout
        self._http_client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: GoogleSettings) -> GoogleProvider:
        """Create a provider from the ``[google]`` settings section."""
        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            scope=settings.scope,
            authorize_url=settings.authorize_url,
            token_url=settings.token_url,
            userinfo_url=settings.userinfo_url,
            token_userinfo_url=settings.token_userinfo_url,
            timeout=settings.http_timeout,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the shared HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        """Close the shared HTTP client. Call from app shutdown lifecycle."""
        if self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()
            self._http_client = None

    def build_authorize_url(self, redirect_uri: str) -> str:
        """Build the URL that starts the authorization-code grant.

        Parameters
        ----------
        redirect_uri : str
            The callback URL Google redirects back to with a ``code``.

        Returns
        -------
        str
            The full authorization URL.
        """
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "scope": self.scope,
            "response_type": "code",
        }
        return f"{self.authorize_url}?{urlencode(params)}"

    async def exchange_code(self, code: str, redirect_uri: str) -> str:
        """Exchange an authorization code for an access token.

        Parameters
        ----------
        code : str
            The authorization code from the callback.
        redirect_uri : str
            The redirect URI used in the authorization request.

        Returns
        -------
        str
            The access token.

        Raises
        ------
        MissingCredential
            If ``code`` is empty.
        TransportError
            If the request could not be completed.
        ProviderRejected
            If Google did not answer 200.
        DecodeError
            If the body is not JSON or carries no ``access_token``.
        """
        if not code:
            msg = "No authorization code supplied"
            raise MissingCredential(msg, provider=self.name)
        data = {
            "code": code,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": redirect_uri,
            "grant_type": "authorization_code",
        }
        resp = await self._request(
            "POST",
            self.token_url,
            step="token exchange",
            data=data,
            headers={"Accept": "application/json"},
        )
        raw = _json_object(resp, step="token exchange")
        token = raw.get("access_token")
        if not isinstance(token, str) or not token:
            msg = "Token exchange response has no access_token"
            raise DecodeError(msg, provider=self.name)
        return token

    async def get_userinfo(self, access_token: str) -> dict[str, Any]:
        """Fetch OpenID userinfo (v3) for an access token.

        Returns
        -------
        dict[str, Any]
            The parsed JSON object.

        Raises
        ------
        TransportError, ProviderRejected, DecodeError
            As for :meth:`exchange_code`.
        """
        resp = await self._request(
            "GET",
            self.userinfo_url,
            step="userinfo",
            params={"access_token": access_token},
            headers={"Accept": "application/json"},
        )
        return _json_object(resp, step="userinfo")

    async def get_profile_payload(self, access_token: str) -> bytes:
        """Fetch the raw v2 userinfo body used to verify a bearer token.

        Returns
        -------
        bytes
            The undecoded response body.

        Raises
        ------
        TransportError, ProviderRejected
            As for :meth:`exchange_code`.
        """
        resp = await self._request(
            "GET",
            self.token_userinfo_url,
            step="token profile",
            params={"access_token": access_token},
            headers={"Accept": "application/json"},
        )
        return resp.content

    async def _request(self, method: str, url: str, *, step: str, **kwargs: Any) -> httpx.Response:
        """Send a request and require a 200 response."""
        try:
            client = await self._get_client()
            resp = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Request to Google failed during %s: %s", step, exc.__class__.__name__)
            msg = f"Google {step} request failed: {exc.__class__.__name__}"
            raise TransportError(msg, provider=self.name) from exc

        if resp.status_code != httpx.codes.OK:
            logger.error("Google %s failed: statusCode=%s", step, resp.status_code)
            msg = f"Google {step} failed: {resp.status_code}"
            raise ProviderRejected(msg, status_code=resp.status_code, provider=self.name)
        return resp


def _json_object(resp: httpx.Response, *, step: str) -> dict[str, Any]:
    """Parse a response body that must be a JSON object."""
    try:
        raw = resp.json()
    except ValueError as exc:
        msg = f"Google {step} response is not JSON"
        raise DecodeError(msg, provider=GOOGLE) from exc
    if not isinstance(raw, dict):
        msg = f"Google {step} response is not a JSON object"
        raise DecodeError(msg, provider=GOOGLE)
    return raw
