"""Catalog gallery: the list of product cards."""
from __future__ import annotations

from typing import TypedDict

from .base import Screen, build_markup, present


class GallerySnapshot(TypedDict, total=False):
    cards: list[Screen]


class Gallery:
    def __init__(self) -> None:
        self.cards: tuple[Screen, ...] = ()

    def render(self, snapshot: GallerySnapshot | None = None) -> Screen:
        if present(snapshot, "cards"):
            self.cards = tuple(snapshot["cards"] or ())
        if not self.cards:
            return Screen(text="🛍 <b>Каталог</b>\n\nТоваров пока нет.")
        rows = [row for card in self.cards for row in card.rows]
        return Screen(text="🛍 <b>Каталог</b>\n\nВыберите товар:", markup=build_markup(rows))
