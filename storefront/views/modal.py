"""Modal window hosting previews, the basket and checkout forms."""
from __future__ import annotations

from typing import Union

from storefront.core.broker import Broker
from storefront.core.constants import BUTTON_TEXT_CLOSE
from storefront.core.events import ModalClose, emit
from storefront.keyboards.callbacks import ModalCb

from .base import Renderable, Screen, build_markup, callback_button

ModalContent = Union[Screen, Renderable]


class Modal:
    """Shows one piece of content at a time with a close button under it.

    Content is either a fixed ``Screen`` or a live view; a live view is
    re-rendered from its current state every time the modal renders, so
    later updates to the view show up without reopening the modal.
    """

    def __init__(self, broker: Broker) -> None:
        self._broker = broker
        self.content: ModalContent | None = None

    @property
    def is_open(self) -> bool:
        return self.content is not None

    def open(self, content: ModalContent) -> Screen:
        self.content = content
        return self.render()

    def close(self) -> None:
        self.content = None

    def render(self, snapshot: dict | None = None) -> Screen:
        if snapshot and "content" in snapshot:
            self.content = snapshot["content"]
        if self.content is None:
            return Screen(text="")
        screen = self.content if isinstance(self.content, Screen) else self.content.render()
        rows = screen.rows
        rows.append([callback_button(BUTTON_TEXT_CLOSE, ModalCb(action="close"))])
        return Screen(text=screen.text, markup=build_markup(rows))

    def click_close(self) -> None:
        emit(self._broker, ModalClose())
