"""Storefront client: event-driven catalog, cart and checkout coordination."""

__version__ = "1.0.0"
