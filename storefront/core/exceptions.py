"""Custom exceptions for the storefront client."""
from __future__ import annotations


class StorefrontException(Exception):
    """Base exception for all storefront errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class ConfigurationException(StorefrontException):
    """Configuration errors."""

    pass


class BrokerException(StorefrontException):
    """Event broker errors."""

    pass


class PublishDepthExceeded(BrokerException):
    """Nested publish calls went deeper than the broker allows."""

    def __init__(self, topic: str, depth: int) -> None:
        super().__init__(f"Publish depth {depth} exceeded while publishing '{topic}'")
        self.topic = topic
        self.depth = depth


class ApiException(StorefrontException):
    """Remote catalog/order API errors."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class OrderSubmissionException(StorefrontException):
    """Order could not be submitted."""

    pass


class SubmissionInProgress(OrderSubmissionException):
    """A second submission was attempted while one is still in flight."""

    def __init__(self) -> None:
        super().__init__("Order submission is already in progress")
