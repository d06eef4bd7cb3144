"""Google OAuth2 credentials plugins.

Provides the redirect-based web login flow, the bearer-token
verification flow, typed profile decoding, and per-type token caches.
"""

from __future__ import annotations

from .base import CredentialsPlugin
from .cache import TokenCache, TokenCacheRegistry
from .profiles import GoogleTokenProfile, TokenProfile, create_user_profile, decode_profile
from .providers import GoogleProvider
from .redirect import GoogleCredentials
from .token import GOOGLE_TOKEN_TYPE, GoogleTokenCredentials


__all__ = [
    "GOOGLE_TOKEN_TYPE",
    "CredentialsPlugin",
    "GoogleCredentials",
    "GoogleProvider",
    "GoogleTokenCredentials",
    "GoogleTokenProfile",
    "TokenCache",
    "TokenCacheRegistry",
    "TokenProfile",
    "create_user_profile",
    "decode_profile",
]
