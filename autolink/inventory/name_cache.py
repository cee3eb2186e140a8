"""
Name Cache — shares the fetched name universe between sessions via Redis.

Key scheme
----------
  autolink:names:ns:{namespace}   – JSON list of page titles

Reads and writes never fail a session: errors are logged and the session
falls back to fetching from the provider.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional, Set

from autolink.config.constants import NAME_CACHE_KEY_TEMPLATE
from autolink.config.settings import NAME_CACHE_TTL_SECONDS

logger = logging.getLogger(__name__)


class RedisNameCache:
    """Name universe stored under one Redis key per namespace."""

    def __init__(
        self,
        redis_client: Any,
        namespace: int = 0,
        ttl: int = NAME_CACHE_TTL_SECONDS,
    ) -> None:
        self._redis = redis_client
        self._ttl = ttl
        self.key = NAME_CACHE_KEY_TEMPLATE.format(namespace=namespace)

    def load(self) -> Optional[Set[str]]:
        """Return the cached names, or None on a miss or a read error."""
        try:
            data = self._redis.get(self.key)
        except Exception as exc:  # noqa: BLE001
            logger.warning("NameCache failed to read %s: %s", self.key, exc)
            return None
        if not data:
            return None
        try:
            names = set(json.loads(data))
        except (ValueError, TypeError) as exc:
            logger.warning("NameCache ignoring unreadable value at %s: %s", self.key, exc)
            return None
        logger.debug("NameCache hit %s (%d names)", self.key, len(names))
        return names

    def store(self, names: Iterable[str]) -> None:
        payload = json.dumps(sorted(names), ensure_ascii=False)
        try:
            self._redis.set(self.key, payload, ex=self._ttl)
        except Exception as exc:  # noqa: BLE001
            logger.warning("NameCache failed to write %s: %s", self.key, exc)

    def clear(self) -> None:
        try:
            self._redis.delete(self.key)
        except Exception as exc:  # noqa: BLE001
            logger.warning("NameCache failed to delete %s: %s", self.key, exc)


class NullNameCache:
    """Cache that never remembers anything."""

    def load(self) -> Optional[Set[str]]:
        return None

    def store(self, names: Iterable[str]) -> None:  # noqa: ARG002
        pass

    def clear(self) -> None:
        pass


def build_redis_client(url: Optional[str] = None) -> Any:
    """
    Build and return a redis.Redis client.

    Falls back to REDIS_URL from settings if *url* is not provided.
    """
    import redis

    from autolink.config.settings import REDIS_URL

    target_url = url or REDIS_URL
    client = redis.Redis.from_url(target_url, decode_responses=True)
    logger.debug("Redis client created for URL: %s", target_url)
    return client
