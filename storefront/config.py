"""
Storefront settings.

Values come from the environment, optionally seeded from a `.env` file in
the project root.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal
from functools import cache
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=ROOT_DIR / ".env")

CART_STORAGE_REDIS = "redis"
CART_STORAGE_MEMORY = "memory"


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int) -> int:
    v = _get_env(*keys)
    if v is None:
        return default
    return int(v)


def _get_float(*keys: str, default: float) -> float:
    v = _get_env(*keys)
    if v is None:
        return default
    return float(v)


@dataclass(frozen=True)
class Settings:
    api_url: str
    api_timeout: float
    cart_storage: str
    redis_url: str
    redis_token: str
    cart_ttl_seconds: int
    shipping_cost: Decimal
    environment: str


def load_settings() -> Settings:
    """Read settings from the current environment."""
    cart_storage = (_get_env("CART_STORAGE", default=CART_STORAGE_REDIS) or "").lower()
    if cart_storage not in (CART_STORAGE_REDIS, CART_STORAGE_MEMORY):
        raise RuntimeError(f"CART_STORAGE must be '{CART_STORAGE_REDIS}' or '{CART_STORAGE_MEMORY}'")

    return Settings(
        api_url=(_get_env("STOREFRONT_API_URL", default="http://localhost:5000") or "").rstrip("/"),
        api_timeout=_get_float("STOREFRONT_API_TIMEOUT", default=10.0),
        cart_storage=cart_storage,
        redis_url=_get_env("UPSTASH_REDIS_REST_URL", default="") or "",
        redis_token=_get_env("UPSTASH_REDIS_REST_TOKEN", default="") or "",
        cart_ttl_seconds=_get_int("CART_TTL_SECONDS", default=86400),
        shipping_cost=Decimal(_get_env("SHIPPING_COST", default="4.99") or "4.99"),
        environment=_get_env("STOREFRONT_ENV", default="development") or "development",
    )


@cache
def get_settings() -> Settings:
    """Get Settings singleton."""
    return load_settings()
