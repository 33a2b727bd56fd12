"""Search result caching with Redis primary and in-memory fallback."""
from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Sequence

import redis

from .config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "assortment:search:"


class CacheBackend(Protocol):
    def get(self, key: str) -> Optional[Dict[str, Any]]: ...

    def set(self, key: str, value: Dict[str, Any], ttl: int) -> None: ...

    def clear(self) -> None: ...


@dataclass
class RedisCache:
    client: redis.Redis

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            data = self.client.get(key)
        except redis.RedisError as exc:  # pragma: no cover - protective
            logger.warning("Redis get failed: %s", exc)
            return None
        if not data:
            return None
        try:
            return json.loads(data)
        except json.JSONDecodeError:
            return None

    def set(self, key: str, value: Dict[str, Any], ttl: int) -> None:
        try:
            self.client.setex(key, ttl, json.dumps(value))
        except redis.RedisError as exc:  # pragma: no cover - protective
            logger.warning("Redis set failed: %s", exc)

    def clear(self) -> None:
        try:
            keys = list(self.client.scan_iter(match=KEY_PREFIX + "*"))
            if keys:
                self.client.delete(*keys)
        except redis.RedisError as exc:  # pragma: no cover - protective
            logger.warning("Redis clear failed: %s", exc)


class InMemoryCache:
    """TTL cache bounded by ``max_entries``; expired entries go on every write."""

    def __init__(self, max_entries: int = 1024) -> None:
        self.max_entries = max_entries
        self._store: Dict[str, tuple[float, Dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            value = self._store.get(key)
            if not value:
                return None
            expires_at, payload = value
            if expires_at < time.time():
                self._store.pop(key, None)
                return None
            return payload

    def set(self, key: str, value: Dict[str, Any], ttl: int) -> None:
        now = time.time()
        with self._lock:
            self._purge(now)
            self._store.pop(key, None)
            while len(self._store) >= self.max_entries:
                # Dicts keep insertion order, so the first key is the oldest write.
                self._store.pop(next(iter(self._store)))
            self._store[key] = (now + ttl, value)

    def _purge(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._store.items() if expires_at < now]
        for key in expired:
            del self._store[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


def cache_key(generation: int, description_tags: Sequence[str], type_tags: Sequence[str]) -> str:
    """Key for one search against one catalog generation.

    Tags are case-folded since index lookups ignore case.
    """
    payload = json.dumps(
        [generation, [t.casefold() for t in description_tags], [t.casefold() for t in type_tags]],
        separators=(",", ":"),
    )
    return KEY_PREFIX + hashlib.sha1(payload.encode("utf-8")).hexdigest()


_cache: CacheBackend | None = None


def get_cache() -> CacheBackend:
    global _cache
    if _cache is not None:
        return _cache
    if not settings.cache_enabled:
        logger.info("Redis cache disabled, using in-memory cache")
        _cache = InMemoryCache(settings.cache_max_entries)
        return _cache
    try:
        client = redis.Redis(host=settings.redis_host, port=settings.redis_port, decode_responses=False)
        client.ping()
        logger.info("Using Redis cache at %s:%s", settings.redis_host, settings.redis_port)
        _cache = RedisCache(client)
    except redis.RedisError:
        logger.warning("Redis not available, using in-memory cache")
        _cache = InMemoryCache(settings.cache_max_entries)
    return _cache
