"""Cart persistence ports: process-local memory and Upstash Redis."""
import json
from abc import ABC, abstractmethod
from typing import Dict, Optional

from storefront.config import get_settings
from storefront.db import RedisKeys, get_redis_sync
from storefront.logging import get_logger, sanitize_id_for_logging

logger = get_logger(__name__)


class CartStorage(ABC):
    """Where a single cart session's snapshot lives."""

    @abstractmethod
    def load(self) -> Optional[dict]:
        """Return the raw snapshot, or None when nothing is stored."""

    @abstractmethod
    def save(self, snapshot: dict) -> None:
        """Replace the stored snapshot."""


class MemoryCartStorage(CartStorage):
    """Keeps the snapshot as a JSON string, so saves and loads copy like a real store."""

    def __init__(self, initial: Optional[dict] = None):
        self._data: Optional[str] = json.dumps(initial) if initial is not None else None

    def load(self) -> Optional[dict]:
        if self._data is None:
            return None
        return json.loads(self._data)

    def save(self, snapshot: dict) -> None:
        self._data = json.dumps(snapshot)


class MemoryCartStorageRegistry:
    """One MemoryCartStorage per cart session, for single-process deployments."""

    def __init__(self):
        self._storages: Dict[str, MemoryCartStorage] = {}

    def for_session(self, session_id: str) -> MemoryCartStorage:
        if session_id not in self._storages:
            self._storages[session_id] = MemoryCartStorage()
        return self._storages[session_id]


class RedisCartStorage(CartStorage):
    """
    Cart snapshot in Redis under cart:{session_id}.

    The TTL is refreshed on every save, so abandoned carts expire after
    CART_TTL_SECONDS of inactivity.
    """

    def __init__(self, session_id: str, redis=None, ttl: Optional[int] = None):
        self.session_id = session_id
        self._redis = redis  # Lazy initialization
        self.ttl = ttl if ttl is not None else get_settings().cart_ttl_seconds

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    @property
    def key(self) -> str:
        return RedisKeys.cart_key(self.session_id)

    def load(self) -> Optional[dict]:
        data = self.redis.get(self.key)
        if not data:
            return None

        try:
            return json.loads(data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Corrupted cart data for session {sanitize_id_for_logging(self.session_id)}: {e}")
            return None

    def save(self, snapshot: dict) -> None:
        self.redis.set(self.key, json.dumps(snapshot), ex=self.ttl)
