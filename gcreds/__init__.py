"""gcreds - Google OAuth2 credentials for async Python web apps.

Authenticates requests either through Google web login (authorization
code grant) or with a Google access token supplied in request headers,
decoding the subject's profile into a caller-defined pydantic model.
"""

from __future__ import annotations

from .auth import (
    GOOGLE_TOKEN_TYPE,
    CredentialsPlugin,
    GoogleCredentials,
    GoogleProvider,
    GoogleTokenCredentials,
    GoogleTokenProfile,
    TokenCache,
    TokenCacheRegistry,
    TokenProfile,
    create_user_profile,
    decode_profile,
)
from .config import GCredsSettings, GoogleSettings, LogSettings, get_settings
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    DecodeError,
    GCredsException,
    MissingCredential,
    ProviderRejected,
    TransportError,
)
from .types import AuthOutcome, OutcomeKind, UserProfile


__version__ = "0.1.0"

__all__ = [
    "GOOGLE_TOKEN_TYPE",
    "AuthOutcome",
    "AuthenticationError",
    "ConfigurationError",
    "CredentialsPlugin",
    "DecodeError",
    "GCredsException",
    "GCredsSettings",
    "GoogleCredentials",
    "GoogleProvider",
    "GoogleSettings",
    "GoogleTokenCredentials",
    "GoogleTokenProfile",
    "LogSettings",
    "MissingCredential",
    "OutcomeKind",
    "ProviderRejected",
    "TokenCache",
    "TokenCacheRegistry",
    "TokenProfile",
    "TransportError",
    "UserProfile",
    "create_user_profile",
    "decode_profile",
    "get_settings",
]
