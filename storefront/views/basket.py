"""Basket: cart lines, total and the checkout button."""
from __future__ import annotations

from typing import TypedDict

from storefront.core.broker import Broker
from storefront.core.constants import BUTTON_TEXT_CHECKOUT
from storefront.core.events import OrderFormOpen, emit
from storefront.keyboards.callbacks import CartCb

from .base import Screen, build_markup, esc, format_price, present, toggle_button


class BasketSnapshot(TypedDict, total=False):
    items: list[Screen]
    total: float
    order_enabled: bool


class Basket:
    def __init__(self, broker: Broker) -> None:
        self._broker = broker
        self.items: tuple[Screen, ...] = ()
        self.total: float = 0
        self.order_enabled = False

    def render(self, snapshot: BasketSnapshot | None = None) -> Screen:
        if present(snapshot, "items"):
            self.items = tuple(snapshot["items"] or ())
        if present(snapshot, "total"):
            self.total = snapshot["total"] or 0
        if present(snapshot, "order_enabled"):
            self.order_enabled = bool(snapshot["order_enabled"])

        lines = ["🛒 <b>Корзина</b>", ""]
        if self.items:
            lines.extend(item.text for item in self.items)
        else:
            lines.append("Корзина пуста")
        lines.extend(["", f"💵 <b>Итого: {esc(format_price(self.total))}</b>"])

        rows = [row for item in self.items for row in item.rows]
        rows.append([toggle_button(BUTTON_TEXT_CHECKOUT, CartCb(action="checkout"), self.order_enabled)])
        return Screen(text="\n".join(lines), markup=build_markup(rows))

    def checkout(self) -> None:
        if not self.order_enabled:
            return
        emit(self._broker, OrderFormOpen())
