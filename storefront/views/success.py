"""Order confirmation."""
from __future__ import annotations

from typing import TypedDict

from storefront.core.broker import Broker
from storefront.core.constants import BUTTON_TEXT_SUCCESS
from storefront.core.events import SuccessModalClose, emit
from storefront.keyboards.callbacks import ModalCb

from .base import Screen, build_markup, callback_button, esc, present


class SuccessSnapshot(TypedDict, total=False):
    description: str


class SuccessForm:
    def __init__(self, broker: Broker) -> None:
        self._broker = broker
        self.description = ""

    def render(self, snapshot: SuccessSnapshot | None = None) -> Screen:
        if present(snapshot, "description"):
            self.description = snapshot["description"] or ""
        button = callback_button(BUTTON_TEXT_SUCCESS, ModalCb(action="success"))
        text = f"✅ <b>Заказ оформлен</b>\n\n{esc(self.description)}"
        return Screen(text=text, markup=build_markup([[button]]))

    def click(self) -> None:
        emit(self._broker, SuccessModalClose())
