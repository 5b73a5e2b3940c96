"""
Shared Dependencies for Routers

Per-request cart engine, notifier and backend client.
"""

from typing import Iterator, Optional

from fastapi import Depends, Header, HTTPException, Request

from storefront.cart import CartEngine, CartStorage, MemoryCartStorageRegistry, RedisCartStorage
from storefront.config import CART_STORAGE_MEMORY, get_settings
from storefront.errors import ERROR_CART_SESSION_REQUIRED
from storefront.services.api_client import StorefrontAPI
from storefront.services.notifications import ToastCollector


# ==================== LAZY SINGLETONS ====================

_memory_storages: Optional[MemoryCartStorageRegistry] = None


def get_memory_storages() -> MemoryCartStorageRegistry:
    """Get or create the process-local cart storage registry (CART_STORAGE=memory)."""
    global _memory_storages
    if _memory_storages is None:
        _memory_storages = MemoryCartStorageRegistry()
    return _memory_storages


# ==================== CART SESSION ====================

def get_session_id(x_cart_session: Optional[str] = Header(default=None)) -> str:
    """Cart session id from the X-Cart-Session header."""
    if not x_cart_session or not x_cart_session.strip():
        raise HTTPException(status_code=401, detail=ERROR_CART_SESSION_REQUIRED)
    return x_cart_session.strip()


def get_cart_storage(session_id: str = Depends(get_session_id)) -> CartStorage:
    if get_settings().cart_storage == CART_STORAGE_MEMORY:
        return get_memory_storages().for_session(session_id)
    return RedisCartStorage(session_id)


def get_notifier() -> ToastCollector:
    """Fresh toast collector per request; drained into the response."""
    return ToastCollector()


def get_cart_engine(
    storage: CartStorage = Depends(get_cart_storage),
    notifier: ToastCollector = Depends(get_notifier),
) -> CartEngine:
    engine = CartEngine(storage=storage, notifier=notifier)
    engine.load()
    return engine


# ==================== BACKEND CLIENT ====================

def get_storefront_api(request: Request) -> Iterator[StorefrontAPI]:
    """Backend client carrying the caller's cookies, so backend session auth applies."""
    api = StorefrontAPI(cookies=dict(request.cookies))
    try:
        yield api
    finally:
        api.close()
