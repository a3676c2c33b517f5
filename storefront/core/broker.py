"""
Synchronous topic-based publish/subscribe broker.

Supports:
- exact topic keys ("basket:open")
- wildcard keys in fnmatch syntax ("basket:*", "*")
- compiled regular expressions (full match against the topic)

The broker knows nothing about the storefront domain. One instance is
created per session and passed explicitly to every component.
"""
from __future__ import annotations

import fnmatch
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .constants import BROKER_MAX_DEPTH
from .exceptions import PublishDepthExceeded

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Any]
TopicKey = Union[str, "re.Pattern[str]"]

_WILDCARD_CHARS = frozenset("*?[")


def _is_wildcard(topic: str) -> bool:
    return any(ch in _WILDCARD_CHARS for ch in topic)


@dataclass(eq=False)
class _Subscription:
    key: TopicKey
    handler: Handler
    active: bool = True

    def matches(self, topic: str) -> bool:
        if isinstance(self.key, re.Pattern):
            return self.key.fullmatch(topic) is not None
        if _is_wildcard(self.key):
            return fnmatch.fnmatchcase(topic, self.key)
        return self.key == topic

    def is_registration_of(self, key: TopicKey, handler: Handler) -> bool:
        return self.key == key and self.handler == handler


@dataclass(frozen=True, slots=True)
class HandlerFailure:
    """A handler raised while a topic was being delivered."""

    topic: str
    handler: Handler
    error: Exception


@dataclass(slots=True)
class DeliveryReport:
    """Outcome of a single publish call."""

    topic: str
    delivered: int = 0
    failures: list[HandlerFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class Broker:
    """In-memory event bus with ordered, re-entrant synchronous delivery."""

    def __init__(self, max_depth: int = BROKER_MAX_DEPTH) -> None:
        self._subscriptions: list[_Subscription] = []
        self._max_depth = max_depth
        self._depth = 0

    def subscribe(self, topic: TopicKey, handler: Handler) -> None:
        """Register ``handler`` for a topic key (exact, wildcard or regex)."""
        self._subscriptions.append(_Subscription(topic, handler))
        logger.debug("Subscribed %s to %s, total: %d", _handler_name(handler), topic, len(self._subscriptions))

    def unsubscribe(self, topic: TopicKey, handler: Handler) -> None:
        """Remove the earliest matching registration. Unknown pairs are ignored."""
        for index, sub in enumerate(self._subscriptions):
            if sub.is_registration_of(topic, handler):
                sub.active = False
                del self._subscriptions[index]
                return

    def has_subscribers(self, topic: str) -> bool:
        return any(sub.matches(topic) for sub in self._subscriptions)

    def clear(self) -> None:
        """Drop every registration."""
        for sub in self._subscriptions:
            sub.active = False
        self._subscriptions.clear()

    def publish(self, topic: str, payload: Any = None) -> DeliveryReport:
        """Deliver ``payload`` to every handler matching ``topic``.

        Handlers run in registration order. A handler that raises does not
        stop delivery to the rest; its failure is logged and recorded in the
        returned report.
        """
        if isinstance(topic, Enum):
            topic = topic.value
        if self._depth >= self._max_depth:
            logger.error("Publish cycle suspected on topic %s (depth %d)", topic, self._depth)
            raise PublishDepthExceeded(topic, self._depth)

        report = DeliveryReport(topic=topic)
        matching = [sub for sub in self._subscriptions if sub.matches(topic)]
        if not matching:
            return report

        self._depth += 1
        try:
            for sub in matching:
                # unsubscribed while this pass was running
                if not sub.active:
                    continue
                try:
                    sub.handler(payload)
                except Exception as e:
                    logger.exception("Handler %s failed on topic %s", _handler_name(sub.handler), topic)
                    report.failures.append(HandlerFailure(topic, sub.handler, e))
                else:
                    report.delivered += 1
        finally:
            self._depth -= 1
        return report
