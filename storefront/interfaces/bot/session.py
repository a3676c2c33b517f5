"""Per-chat storefront sessions.

Every chat gets its own Broker, stores, views and orchestrator; only the
network client is shared between sessions.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass, field

from storefront.core.broker import Broker
from storefront.core.constants import BROKER_MAX_DEPTH, MAX_SESSIONS
from storefront.integrations.weblarek_api import StorefrontApi
from storefront.services.checkout_orchestrator import CheckoutOrchestrator
from storefront.stores import CartStore, CatalogStore, CustomerStore
from storefront.views import ViewSet

logger = logging.getLogger(__name__)


@dataclass
class StorefrontSession:
    chat_id: int
    broker: Broker
    catalog: CatalogStore
    cart: CartStore
    customer: CustomerStore
    views: ViewSet
    orchestrator: CheckoutOrchestrator
    # Message the page is rendered into; None until the first one is sent
    message_id: int | None = field(default=None)

    @classmethod
    def create(
        cls,
        chat_id: int,
        api: StorefrontApi,
        cdn_url: str = "",
        max_depth: int = BROKER_MAX_DEPTH,
    ) -> "StorefrontSession":
        broker = Broker(max_depth=max_depth)
        catalog = CatalogStore(broker)
        cart = CartStore(broker)
        customer = CustomerStore(broker)
        views = ViewSet.create(broker)
        orchestrator = CheckoutOrchestrator(
            broker,
            api=api,
            catalog=catalog,
            cart=cart,
            customer=customer,
            views=views,
            cdn_url=cdn_url,
        )
        return cls(
            chat_id=chat_id,
            broker=broker,
            catalog=catalog,
            cart=cart,
            customer=customer,
            views=views,
            orchestrator=orchestrator,
        )


class SessionRegistry:
    """Creates sessions on first contact and keeps the most recently used ones.

    Beyond ``max_sessions`` the least recently used chat is dropped; its next
    update starts a fresh session. A chat with an order in flight is kept.
    """

    def __init__(
        self,
        api: StorefrontApi,
        cdn_url: str = "",
        max_depth: int = BROKER_MAX_DEPTH,
        max_sessions: int = MAX_SESSIONS,
    ) -> None:
        self.api = api
        self.cdn_url = cdn_url
        self.max_depth = max_depth
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[int, StorefrontSession] = OrderedDict()

    def get(self, chat_id: int) -> StorefrontSession:
        session = self._sessions.get(chat_id)
        if session is not None:
            self._sessions.move_to_end(chat_id)
            return session

        session = StorefrontSession.create(chat_id, self.api, self.cdn_url, self.max_depth)
        self._sessions[chat_id] = session
        logger.info("New storefront session for chat %s, active: %d", chat_id, len(self._sessions))
        self._evict(keep=chat_id)
        return session

    def _evict(self, keep: int) -> None:
        for chat_id in list(self._sessions):
            if len(self._sessions) <= self.max_sessions:
                return
            if chat_id == keep or self._sessions[chat_id].orchestrator.is_submitting:
                continue
            logger.debug("Evicting idle storefront session for chat %s", chat_id)
            self.drop(chat_id)

    def drop(self, chat_id: int) -> None:
        session = self._sessions.pop(chat_id, None)
        if session is not None:
            session.orchestrator.detach()
            session.broker.clear()

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
