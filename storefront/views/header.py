"""Header: basket counter and the basket button."""
from __future__ import annotations

from typing import TypedDict

from storefront.core.broker import Broker
from storefront.core.events import BasketOpen, emit
from storefront.keyboards.callbacks import CartCb

from .base import Screen, build_markup, callback_button, present


class HeaderSnapshot(TypedDict, total=False):
    counter: int


class Header:
    """Shows how many products are in the cart; opens the basket on click."""

    def __init__(self, broker: Broker) -> None:
        self._broker = broker
        self.counter = 0

    def render(self, snapshot: HeaderSnapshot | None = None) -> Screen:
        if present(snapshot, "counter"):
            self.counter = int(snapshot["counter"])
        button = callback_button(f"🛒 Корзина ({self.counter})", CartCb(action="open"))
        return Screen(text=f"🛒 В корзине: {self.counter}", markup=build_markup([[button]]))

    def counter_clear(self) -> Screen:
        return self.render({"counter": 0})

    def click_basket(self) -> None:
        emit(self._broker, BasketOpen())
