"""Redis-backed key-value store."""

import json
from typing import Any

import redis


class RedisKeyValueStore:
    """KeyValueStore keeping each collection as one JSON string value."""

    def __init__(self, redis_client: redis.Redis, namespace: str = "case_portal") -> None:
        """Initialize store.

        Args:
            redis_client: Redis client
            namespace: Prefix applied to every logical key
        """
        self._redis = redis_client
        self._namespace = namespace

    def _redis_key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get(self, key: str) -> list[dict[str, Any]] | None:
        """Read the whole list stored under key."""
        raw = self._redis.get(self._redis_key(key))
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: list[dict[str, Any]]) -> None:
        """Replace the whole list stored under key."""
        self._redis.set(self._redis_key(key), json.dumps(value))

    def ping(self) -> bool:
        """Ping the Redis server."""
        return bool(self._redis.ping())
