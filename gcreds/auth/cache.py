"""In-memory token-to-profile caches.

Provides TokenCache, a bounded or unbounded LRU mapping from bearer
token to decoded profile, and TokenCacheRegistry, which hands out one
cache per profile type so that differently shaped profiles never share
entries.
"""

# pylint: disable=logging-too-many-args

from __future__ import annotations

import logging
import threading

from collections import OrderedDict
from typing import Generic, TypeVar


logger = logging.getLogger("gcreds.auth")

ProfileT = TypeVar("ProfileT")


class TokenCache(Generic[ProfileT]):
    """Token-to-profile cache for a single profile type.

    Thread-safe via threading.Lock, held only for the dict operation so
    callers on the event loop never wait on I/O. When ``max_size`` is
    positive, least-recently-used entries are evicted to stay within it.

    Parameters
    ----------
    max_size : int
        Maximum number of entries (0 = unlimited).
    """

    def __init__(self, max_size: int = 0) -> None:
        """Initialize the token cache."""
        if max_size < 0:
            msg = f"max_size must be >= 0, got {max_size}"
            raise ValueError(msg)
        self._max_size = max_size
        self._entries: OrderedDict[str, ProfileT] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        """Configured bound (0 = unlimited)."""
        return self._max_size

    def get(self, token: str) -> ProfileT | None:
        """Return the profile cached for ``token``, or None."""
        with self._lock:
            profile = self._entries.get(token)
            if profile is not None:
                self._entries.move_to_end(token)
            return profile

    def put(self, token: str, profile: ProfileT) -> None:
        """Cache ``profile`` under ``token``, overwriting any previous entry."""
        with self._lock:
            self._entries[token] = profile
            self._entries.move_to_end(token)
            if self._max_size:
                while len(self._entries) > self._max_size:
                    self._entries.popitem(last=False)

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class TokenCacheRegistry:
    """Owns one TokenCache per profile type.

    Caches are keyed by the profile class itself, so two shapes with the
    same class name in different modules still get separate caches.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._caches: dict[type, TokenCache] = {}
        self._lock = threading.Lock()

    def cache_for(self, profile_type: type[ProfileT], max_size: int | None = None) -> TokenCache[ProfileT]:
        """Return the cache for ``profile_type``, creating it on first use.

        Parameters
        ----------
        profile_type : type
            The profile class the cache holds.
        max_size : int, optional
            Bound for a newly created cache. Defaults to the class's
            ``cache_size`` attribute, or 0 (unlimited) if it has none.
            Ignored when the cache already exists.

        Returns
        -------
        TokenCache
            The cache dedicated to ``profile_type``.
        """
        with self._lock:
            cache = self._caches.get(profile_type)
            if cache is None:
                if max_size is None:
                    max_size = getattr(profile_type, "cache_size", 0)
                cache = TokenCache(max_size=max_size)
                self._caches[profile_type] = cache
                logger.debug(
                    "Token cache size for %s.%s: %s",
                    profile_type.__module__,
                    profile_type.__qualname__,
                    max_size or "unlimited",
                )
            return cache

    def __contains__(self, profile_type: object) -> bool:
        with self._lock:
            return profile_type in self._caches
