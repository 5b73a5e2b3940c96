"""
Storefront REST backend client.

Thin synchronous wrapper over the catalog, order, review and auth endpoints.
Session auth rides on the client's cookie jar, so one StorefrontAPI instance
corresponds to one logged-in (or anonymous) user.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic.alias_generators import to_camel
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from storefront.config import get_settings
from storefront.errors import ERROR_BACKEND_UNAVAILABLE
from storefront.logging import get_logger
from storefront.models import (
    Credentials,
    Order,
    Product,
    ProductInput,
    Registration,
    Review,
    ReviewRequest,
    User,
)
from storefront.services.money import to_float

logger = get_logger(__name__)

NO_RESPONSE_BODY = "No response body"


class StorefrontAPIError(Exception):
    """Non-success answer (or no answer) from the storefront backend."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] if response.text else NO_RESPONSE_BODY
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return NO_RESPONSE_BODY


def _camel_case_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Partial product update in the backend's wire format."""
    return {
        to_camel(key): to_float(value) if isinstance(value, Decimal) else value
        for key, value in changes.items()
    }


class StorefrontAPI:
    """Client for the storefront REST backend."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        cookies: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        settings = get_settings()
        self._client = httpx.Client(
            base_url=base_url or settings.api_url,
            timeout=timeout if timeout is not None else settings.api_timeout,
            cookies=cookies,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "StorefrontAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ==================== INTERNAL HELPERS ====================

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        reraise=True,
    )
    def _get(self, path: str) -> httpx.Response:
        """GETs are idempotent, so transport errors are retried."""
        return self._client.get(path)

    def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        try:
            if method == "GET":
                return self._get(path)
            return self._client.request(method, path, json=json)
        except httpx.TransportError as e:
            logger.error(f"Storefront backend unreachable ({method} {path}): {e}")
            raise StorefrontAPIError(503, ERROR_BACKEND_UNAVAILABLE) from e

    def _call(self, method: str, path: str, json: Any = None, none_on: tuple = ()) -> Optional[httpx.Response]:
        """Send a request; return None for statuses in `none_on`, raise on other failures."""
        response = self._request(method, path, json=json)
        if response.status_code in none_on:
            return None
        if response.is_success:
            return response
        message = _error_message(response)
        logger.warning(f"Storefront backend error on {method} {path}: {response.status_code} {message}")
        raise StorefrontAPIError(response.status_code, message)

    def _products(self, path: str) -> List[Product]:
        response = self._call("GET", path)
        return [Product.model_validate(p) for p in response.json()]

    # ==================== AUTH ====================

    def login(self, username: str, password: str) -> User:
        credentials = Credentials(username=username, password=password)
        response = self._call("POST", "/api/login", json=credentials.model_dump())
        return User.model_validate(response.json())

    def register(self, username: str, password: str) -> User:
        registration = Registration(username=username, password=password)
        response = self._call("POST", "/api/register", json=registration.model_dump())
        return User.model_validate(response.json())

    def logout(self) -> None:
        self._call("POST", "/api/logout")

    def current_user(self) -> Optional[User]:
        response = self._call("GET", "/api/user", none_on=(401,))
        if response is None:
            return None
        return User.model_validate(response.json())

    # ==================== CATALOG ====================

    def list_products(self) -> List[Product]:
        return self._products("/api/products")

    def featured_products(self) -> List[Product]:
        return self._products("/api/products/featured")

    def new_products(self) -> List[Product]:
        return self._products("/api/products/new")

    def products_by_category(self, category: str) -> List[Product]:
        return self._products(f"/api/products/category/{quote(category, safe='')}")

    def get_product(self, product_id: int) -> Optional[Product]:
        response = self._call("GET", f"/api/products/{product_id}", none_on=(404,))
        if response is None:
            return None
        return Product.model_validate(response.json())

    # Admin-gated writes: the backend answers 403 for non-admin sessions

    def create_product(self, data: ProductInput) -> Product:
        response = self._call("POST", "/api/products", json=data.model_dump(mode="json", by_alias=True))
        return Product.model_validate(response.json())

    def update_product(self, product_id: int, changes: Dict[str, Any]) -> Optional[Product]:
        response = self._call(
            "PUT", f"/api/products/{product_id}", json=_camel_case_changes(changes), none_on=(404,)
        )
        if response is None:
            return None
        return Product.model_validate(response.json())

    def delete_product(self, product_id: int) -> bool:
        response = self._call("DELETE", f"/api/products/{product_id}", none_on=(404,))
        return response is not None

    # ==================== ORDERS ====================

    def create_order(self, payload: Dict[str, Any]) -> Order:
        response = self._call("POST", "/api/orders", json=payload)
        order = Order.model_validate(response.json())
        logger.info(f"Order #{order.id} created")
        return order

    def list_orders(self) -> List[Order]:
        response = self._call("GET", "/api/orders")
        return [Order.model_validate(o) for o in response.json()]

    def get_order(self, order_id: int) -> Optional[Order]:
        response = self._call("GET", f"/api/orders/{order_id}", none_on=(404,))
        if response is None:
            return None
        return Order.model_validate(response.json())

    # ==================== REVIEWS ====================

    def list_reviews(self, product_id: int) -> List[Review]:
        response = self._call("GET", f"/api/products/{product_id}/reviews")
        return [Review.model_validate(r) for r in response.json()]

    def create_review(self, product_id: int, rating: int, comment: str) -> Review:
        request = ReviewRequest(rating=rating, comment=comment)
        response = self._call("POST", f"/api/products/{product_id}/reviews", json=request.model_dump())
        return Review.model_validate(response.json())
