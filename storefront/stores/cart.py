"""Cart store: one unit per distinct product."""
from __future__ import annotations

import logging

from storefront.core.broker import Broker
from storefront.core.events import CartChanged, emit
from storefront.domain.product import Product

logger = logging.getLogger(__name__)


def _product_id(product: Product | str) -> str:
    return product if isinstance(product, str) else product.id


class CartStore:
    """Set of products keyed by id, in insertion order."""

    def __init__(self, broker: Broker) -> None:
        self._broker = broker
        self._items: dict[str, Product] = {}

    def _announce(self) -> None:
        emit(
            self._broker,
            CartChanged(
                items=self.get_items(),
                total=self.get_total_price(),
                count=self.get_product_count(),
            ),
        )

    def add(self, product: Product) -> None:
        """Add ``product``; adding one already present is a silent no-op."""
        if product.id in self._items:
            return
        self._items[product.id] = product
        logger.debug("Cart add %s, count=%d", product.id, len(self._items))
        self._announce()

    def remove(self, product: Product | str) -> None:
        """Remove by product or id; removing an absent one is a silent no-op."""
        if self._items.pop(_product_id(product), None) is None:
            return
        logger.debug("Cart remove %s, count=%d", _product_id(product), len(self._items))
        self._announce()

    def clear(self) -> None:
        self._items.clear()
        self._announce()

    def has_product(self, product_id: str) -> bool:
        return product_id in self._items

    def get_items(self) -> tuple[Product, ...]:
        return tuple(self._items.values())

    def get_product_ids(self) -> list[str]:
        return list(self._items)

    def get_total_price(self) -> float:
        """Sum of prices; unpriced products contribute 0."""
        return sum(item.price for item in self._items.values() if item.price is not None)

    def get_product_count(self) -> int:
        return len(self._items)
