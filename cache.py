"""Redis-backed JSON cache used for short-lived aggregations.

When ``REDIS_URL`` is not configured, or Redis cannot be reached, every call
degrades to a cache miss so callers always fall back to computing the value.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import redis

logger = logging.getLogger(__name__)


class RedisCache:
    """Thin JSON wrapper around a lazily created Redis client."""

    def __init__(self) -> None:
        self._url: str | None = None
        self._client: redis.Redis | None = None
        self.key_prefix = "eventpros"

    def init_app(self, app) -> None:
        self._url = app.config.get("REDIS_URL")
        self._client = None
        self.key_prefix = app.config.get("CACHE_KEY_PREFIX", "eventpros")
        app.extensions["redis_cache"] = self

    def _get_client(self) -> redis.Redis | None:
        if self._client is None and self._url:
            try:
                self._client = redis.from_url(
                    self._url,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5,
                )
            except (redis.RedisError, ValueError) as exc:
                logger.warning("Redis cache unavailable: %s", exc)
                return None
        return self._client

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}"

    def get(self, key: str) -> Any | None:
        client = self._get_client()
        if client is None:
            return None
        try:
            value = client.get(self._key(key))
        except redis.RedisError as exc:
            logger.error("Cache get failed for %s: %s", key, exc)
            return None
        if value is None:
            logger.debug("Cache miss: %s", key)
            return None
        return json.loads(value)

    def set(self, key: str, value: Any, ttl: int) -> bool:
        client = self._get_client()
        if client is None:
            return False
        try:
            client.setex(self._key(key), ttl, json.dumps(value, default=str))
        except redis.RedisError as exc:
            logger.error("Cache set failed for %s: %s", key, exc)
            return False
        return True

    def delete(self, key: str) -> bool:
        client = self._get_client()
        if client is None:
            return False
        try:
            client.delete(self._key(key))
        except redis.RedisError as exc:
            logger.error("Cache delete failed for %s: %s", key, exc)
            return False
        return True
