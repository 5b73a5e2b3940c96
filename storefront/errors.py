"""
Common Error Constants

Centralized error messages shared by the cart facade, checkout and the
backend client.
"""

# Session errors
ERROR_CART_SESSION_REQUIRED = "Cart session required"

# Cart errors
ERROR_CART_EMPTY = "Cart is empty"

# Order errors
ERROR_ORDER_FAILED = "There was an error processing your order. Please try again."

# Backend errors
ERROR_BACKEND_UNAVAILABLE = "Storefront backend unavailable"
