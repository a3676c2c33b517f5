"""Telegram adapter over the storefront core."""
from .handlers import router, setup_dependencies
from .session import SessionRegistry, StorefrontSession

__all__ = ["SessionRegistry", "StorefrontSession", "router", "setup_dependencies"]
