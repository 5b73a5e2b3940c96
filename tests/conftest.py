"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Set test environment variables
os.environ.setdefault("CART_STORAGE", "memory")
os.environ.setdefault("STOREFRONT_API_URL", "http://backend.test")
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")

from storefront.cart import CartEngine, CartLine, MemoryCartStorage
from storefront.services.notifications import ToastCollector


@pytest.fixture
def widget_line():
    """Plain-priced line: 2 x 10.00"""
    return CartLine(
        product_id=1,
        name="Widget",
        image_url="https://img.test/widget.png",
        price=10,
        quantity=2,
    )


@pytest.fixture
def gadget_line():
    """Line whose discount price is the charged price: 1 x 15.00 (base 20.00)"""
    return CartLine(
        product_id=2,
        name="Gadget",
        image_url="https://img.test/gadget.png",
        price=20,
        discount_price=15,
        quantity=1,
    )


@pytest.fixture
def memory_storage():
    return MemoryCartStorage()


@pytest.fixture
def toasts():
    return ToastCollector()


@pytest.fixture
def engine(memory_storage, toasts):
    """Cart engine over in-memory storage with a toast collector"""
    return CartEngine(storage=memory_storage, notifier=toasts)


@pytest.fixture
def mock_redis():
    """Mock Upstash Redis client"""
    redis = Mock()
    redis.get.return_value = None
    redis.set.return_value = True
    return redis


@pytest.fixture
def sample_product():
    """Product as returned by the backend (camelCase)"""
    return {
        "id": 3,
        "name": "Ceramic Mug",
        "description": "Hand-glazed 350ml mug",
        "price": 24.99,
        "discountPrice": 29.99,
        "imageUrl": "https://img.test/mug.png",
        "category": "Home Decor",
        "inStock": True,
        "isNew": False,
        "isFeatured": True,
        "rating": 4.5,
        "reviewCount": 12,
    }


@pytest.fixture
def sample_order():
    """Order as returned by the backend (camelCase)"""
    return {
        "id": 42,
        "userId": 7,
        "status": "pending",
        "totalAmount": 34.99,
        "shippingAddress": "1 Main St, Springfield, IL 62701",
        "createdAt": "2025-01-01T00:00:00+00:00",
    }
