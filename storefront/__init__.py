"""
Storefront Core Module

- cart: cart engine (intents, validation, persistence ports)
- orders: checkout from the cart
- services: money helpers, notifications, backend REST client
- routers: FastAPI cart facade
- db: Redis client for cart snapshots
"""

__version__ = "0.1.0"
