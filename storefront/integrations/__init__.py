"""Remote API integrations."""
from .weblarek_api import StorefrontApi, WeblarekApiClient

__all__ = ["StorefrontApi", "WeblarekApiClient"]
