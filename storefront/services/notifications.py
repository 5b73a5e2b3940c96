"""
Notification sinks for cart and checkout confirmations.

A notifier receives (title, description) pairs and is fire-and-forget:
callers never depend on delivery.
"""
from dataclasses import dataclass
from typing import List, Protocol

from storefront.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)

# Toasts stay on screen for two seconds
TOAST_DURATION_MS = 2000

# Titles and messages
TITLE_ITEM_ADDED = "Added to Cart"
TITLE_ITEM_REMOVED = "Item Removed"
TITLE_ORDER_FAILED = "Order Failed"
MSG_ITEM_REMOVED = "Item has been removed from your cart."


def item_added_message(name: str) -> str:
    return f"{name} has been added to your cart."


class Notifier(Protocol):
    def notify(self, title: str, description: str) -> None:
        ...


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    duration: int = TOAST_DURATION_MS

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description, "duration": self.duration}


class ToastCollector:
    """Collects toasts for the UI layer to drain and display."""

    def __init__(self):
        self._toasts: List[Toast] = []

    def notify(self, title: str, description: str) -> None:
        self._toasts.append(Toast(title=title, description=description))

    @property
    def pending(self) -> List[Toast]:
        return list(self._toasts)

    def drain(self) -> List[Toast]:
        """Return and forget all collected toasts."""
        toasts, self._toasts = self._toasts, []
        return toasts


class LoggingNotifier:
    """Writes notifications to the log (headless use, scripts)."""

    def notify(self, title: str, description: str) -> None:
        logger.info(f"{title}: {sanitize_string_for_logging(description, max_length=100)}")
