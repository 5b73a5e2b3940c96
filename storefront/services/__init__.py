"""Storefront services: money helpers, notifications and the backend REST client."""
