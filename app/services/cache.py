"""
TTL cache
=========

Small key/value cache shared by the feature matrix, asset lists and road data.

Two backends behind one interface:
- ``MemoryCache``: in-process dict with monotonic-clock expiry
- ``RedisCache``: JSON values with ``SETEX``; backend errors count as misses

``build_cache()`` picks one at startup. The instance lives on ``app.state`` and
is handed to services explicitly; nothing here is module-global.
"""

import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

import redis

from app.middleware.metrics import CACHE_REQUESTS

logger = logging.getLogger("scanstreet.cache")

DEFAULT_TTL = 300  # 5 min
KEY_PREFIX = "scanstreet:"


def cache_key(*parts: Any) -> str:
    return KEY_PREFIX + ":".join(str(p) for p in parts)


class Cache:
    """Interface shared by the cache backends."""

    backend = "none"

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def invalidate(self, prefix: str) -> int:
        """Drop every key starting with ``prefix``; returns how many went."""
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def get_or_set(self, key: str, loader: Callable[[], Any], ttl: int = DEFAULT_TTL) -> Any:
        value = self.get(key)
        if value is not None:
            return value
        value = loader()
        if value is not None:
            self.set(key, value, ttl)
        return value

    def _record(self, hit: bool) -> None:
        CACHE_REQUESTS.labels(backend=self.backend, outcome="hit" if hit else "miss").inc()


class MemoryCache(Cache):
    backend = "memory"

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._data: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                self._record(False)
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._data[key]
                self._record(False)
                return None
        self._record(True)
        return value

    def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL) -> None:
        with self._lock:
            self._data[key] = (self._clock() + ttl, value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def invalidate(self, prefix: str) -> int:
        with self._lock:
            doomed = [k for k in self._data if k.startswith(prefix)]
            for k in doomed:
                del self._data[k]
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


class RedisCache(Cache):
    backend = "redis"

    def __init__(self, client: "redis.Redis"):
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisCache":
        return cls(redis.from_url(url, decode_responses=True))

    def ping(self) -> bool:
        return bool(self._client.ping())

    def get(self, key: str) -> Optional[Any]:
        try:
            data = self._client.get(key)
        except redis.RedisError as e:
            logger.debug("Cache get error: %s", e)
            self._record(False)
            return None
        if not data:
            self._record(False)
            return None
        self._record(True)
        return json.loads(data)

    def set(self, key: str, value: Any, ttl: int = DEFAULT_TTL) -> None:
        try:
            self._client.setex(key, ttl, json.dumps(value, default=str))
        except redis.RedisError as e:
            logger.debug("Cache set error: %s", e)

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except redis.RedisError as e:
            logger.debug("Cache delete error: %s", e)

    def invalidate(self, prefix: str) -> int:
        try:
            keys = list(self._client.scan_iter(match=prefix + "*"))
            if keys:
                return self._client.delete(*keys)
            return 0
        except redis.RedisError as e:
            logger.debug("Cache invalidate error: %s", e)
            return 0

    def clear(self) -> None:
        self.invalidate(KEY_PREFIX)


def build_cache(redis_url: str = "") -> Cache:
    """Redis when configured and reachable, otherwise an in-process cache."""
    if redis_url:
        cache = RedisCache.from_url(redis_url)
        try:
            cache.ping()
        except redis.RedisError as e:
            logger.warning("⚠️ Redis unavailable at %s: %s — using memory cache", redis_url, e)
        else:
            logger.info("✅ Redis cache connected: %s", redis_url)
            return cache
    return MemoryCache()
