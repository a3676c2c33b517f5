"""Catalog store: product list and the product currently inspected."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from storefront.core.broker import Broker
from storefront.core.events import ProductSelected, ProductsReceived, emit
from storefront.domain.product import Product

logger = logging.getLogger(__name__)


class CatalogStore:
    """Ordered product list (server order) plus a weak selection by id."""

    def __init__(self, broker: Broker) -> None:
        self._broker = broker
        self._products: tuple[Product, ...] = ()
        self._selected_id: str | None = None

    def set_products(self, products: Iterable[Product]) -> None:
        """Replace the whole catalog and announce it."""
        self._products = tuple(products)
        logger.info("Catalog loaded: %d products", len(self._products))
        emit(self._broker, ProductsReceived(products=self._products))

    def get_products(self) -> tuple[Product, ...]:
        return self._products

    def get_product(self, product_id: str) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def set_selected(self, product: Product) -> None:
        """Remember ``product`` for the preview and announce the selection."""
        self._selected_id = product.id
        emit(self._broker, ProductSelected(product=product))

    def get_selected(self) -> Product | None:
        """Selected product, or None if nothing is selected or it left the catalog."""
        if self._selected_id is None:
            return None
        return self.get_product(self._selected_id)

    def clear_selected(self) -> None:
        self._selected_id = None
