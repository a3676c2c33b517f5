"""Product cards: catalog tile, detailed preview and basket line."""
from __future__ import annotations

from collections.abc import Callable
from typing import TypedDict

from storefront.core.broker import Broker
from storefront.core.events import ProductSubmit, emit
from storefront.keyboards.callbacks import CartCb, CatalogCb

from .base import (
    CardFace,
    Screen,
    build_markup,
    callback_button,
    callback_ref,
    category_marker,
    esc,
    present,
    shorten,
    toggle_button,
)

CardAction = Callable[[], None]


class ProductCardSnapshot(TypedDict, total=False):
    id: str
    title: str
    price: float | None
    category: str
    image: str


class PreviewCardSnapshot(ProductCardSnapshot, total=False):
    description: str
    button_text: str
    button_enabled: bool


class BasketCardSnapshot(TypedDict, total=False):
    id: str
    index: int
    title: str
    price: float | None


class ProductCard:
    """Catalog tile: one button with category marker, title and price."""

    def __init__(self, on_click: CardAction | None = None) -> None:
        self._on_click = on_click
        self.face = CardFace()
        self.product_id = ""
        self.category = ""
        self.image = ""

    def render(self, snapshot: ProductCardSnapshot | None = None) -> Screen:
        self.face.apply(snapshot)
        if present(snapshot, "id"):
            self.product_id = snapshot["id"]
        if present(snapshot, "category"):
            self.category = snapshot["category"] or ""
        if present(snapshot, "image"):
            self.image = snapshot["image"] or ""

        label = f"{category_marker(self.category)} {shorten(self.face.title)} · {self.face.price_text}"
        button = callback_button(label, CatalogCb(action="select", ref=self.ref))
        return Screen(text=f"{self.face.title_html} · {esc(self.face.price_text)}", markup=build_markup([[button]]))

    @property
    def ref(self) -> str:
        return callback_ref(self.product_id)

    def click(self) -> None:
        if self._on_click is not None:
            self._on_click()


class PreviewCard:
    """Detailed product view with the add/remove button."""

    def __init__(self, broker: Broker) -> None:
        self._broker = broker
        self.face = CardFace()
        self.product_id = ""
        self.category = ""
        self.image = ""
        self.description = ""
        self.button_text = ""
        self.button_enabled = False

    def render(self, snapshot: PreviewCardSnapshot | None = None) -> Screen:
        self.face.apply(snapshot)
        for name in ("category", "image", "description", "button_text"):
            if present(snapshot, name):
                setattr(self, name, snapshot[name] or "")
        if present(snapshot, "id"):
            self.product_id = snapshot["id"]
        if present(snapshot, "button_enabled"):
            self.button_enabled = bool(snapshot["button_enabled"])

        lines = [self.face.title_html]
        if self.category:
            lines.append(f"{category_marker(self.category)} {esc(self.category)}")
        if self.description:
            lines.extend(["", esc(self.description)])
        lines.extend(["", f"💰 {esc(self.face.price_text)}"])
        if self.image:
            lines.append(f'<a href="{esc(self.image)}">🖼 Изображение</a>')

        rows = []
        if self.button_text:
            rows.append(
                [
                    toggle_button(
                        self.button_text,
                        CatalogCb(action="submit", ref=self.ref),
                        self.button_enabled,
                    )
                ]
            )
        return Screen(text="\n".join(lines), markup=build_markup(rows))

    @property
    def ref(self) -> str:
        return callback_ref(self.product_id)

    def click_button(self) -> None:
        if not self.button_enabled:
            return
        emit(self._broker, ProductSubmit())


class BasketCard:
    """Numbered basket line with a delete button."""

    def __init__(self, on_delete: CardAction | None = None) -> None:
        self._on_delete = on_delete
        self.face = CardFace()
        self.product_id = ""
        self.index = 0

    def render(self, snapshot: BasketCardSnapshot | None = None) -> Screen:
        self.face.apply(snapshot)
        if present(snapshot, "id"):
            self.product_id = snapshot["id"]
        if present(snapshot, "index"):
            self.index = int(snapshot["index"])

        button = callback_button(
            f"🗑 {self.index}. {shorten(self.face.title)}",
            CartCb(action="remove", ref=self.ref),
        )
        text = f"{self.index}. {esc(self.face.title)} — {esc(self.face.price_text)}"
        return Screen(text=text, markup=build_markup([[button]]))

    @property
    def ref(self) -> str:
        return callback_ref(self.product_id)

    def delete(self) -> None:
        if self._on_delete is not None:
            self._on_delete()
