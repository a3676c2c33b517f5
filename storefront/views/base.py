"""Rendering contract and shared formatting for presentation units.

A presentation unit owns a piece of display surface. ``render`` writes
whatever fields the snapshot carries into that surface and returns a
``Screen``: the text and inline keyboard a chat message would show.
Fields missing from a snapshot are left as they were.
"""
from __future__ import annotations

import hashlib
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from html import escape
from typing import Any, Protocol, TypeVar

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from storefront.core.constants import (
    CATEGORY_MARKER_UNKNOWN,
    CATEGORY_MARKERS,
    CURRENCY,
    MAX_BUTTON_TITLE_LENGTH,
    PRICE_UNAVAILABLE,
)
from storefront.keyboards.callbacks import NoopCb

SnapshotT = TypeVar("SnapshotT", contravariant=True)

ButtonRow = list[InlineKeyboardButton]


@dataclass(frozen=True, slots=True)
class Screen:
    """Opaque render handle: message text plus optional inline keyboard."""

    text: str
    markup: InlineKeyboardMarkup | None = None

    @property
    def rows(self) -> list[ButtonRow]:
        if self.markup is None:
            return []
        return [list(row) for row in self.markup.inline_keyboard]


class Renderable(Protocol[SnapshotT]):
    """Anything that projects a (partial) snapshot onto its surface."""

    def render(self, snapshot: SnapshotT | None = None) -> Screen: ...


def esc(val: Any) -> str:
    """HTML-escape helper used in view texts."""
    if val is None:
        return ""
    return escape(str(val))


def format_amount(amount: float | int) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return f"{amount:.2f}"


def format_price(price: float | int | None) -> str:
    """``750 синапсов`` or ``Бесценно`` for unpriced products."""
    if price is None:
        return PRICE_UNAVAILABLE
    return f"{format_amount(price)} {CURRENCY}"


def category_marker(category: str | None) -> str:
    return CATEGORY_MARKERS.get(category or "", CATEGORY_MARKER_UNKNOWN)


def shorten(text: str, limit: int = MAX_BUTTON_TITLE_LENGTH) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def callback_ref(product_id: str) -> str:
    """Short, separator-free stand-in for a product id in callback data."""
    return hashlib.blake2s(product_id.encode("utf-8"), digest_size=6).hexdigest()


def callback_button(text: str, callback: Any) -> InlineKeyboardButton:
    return InlineKeyboardButton(text=text, callback_data=callback.pack())


def toggle_button(text: str, callback: Any, enabled: bool) -> InlineKeyboardButton:
    """Telegram has no disabled buttons; a disabled one is a locked no-op."""
    if enabled:
        return callback_button(text, callback)
    return callback_button(f"🔒 {text}", NoopCb(reason="disabled"))


def build_markup(rows: Iterable[Sequence[InlineKeyboardButton]]) -> InlineKeyboardMarkup | None:
    builder = InlineKeyboardBuilder()
    has_rows = False
    for row in rows:
        if row:
            builder.row(*row)
            has_rows = True
    return builder.as_markup() if has_rows else None


def present(snapshot: Mapping[str, Any] | None, key: str) -> bool:
    return snapshot is not None and key in snapshot


class CardFace:
    """Title and price lines shared by every product card."""

    def __init__(self) -> None:
        self.title = ""
        self.price: float | None = None

    def apply(self, snapshot: Mapping[str, Any] | None) -> None:
        if present(snapshot, "title"):
            self.title = snapshot["title"] or ""
        if present(snapshot, "price"):
            self.price = snapshot["price"]

    @property
    def price_text(self) -> str:
        return format_price(self.price)

    @property
    def title_html(self) -> str:
        return f"<b>{esc(self.title)}</b>"


class FormStatus:
    """Error line and submit availability shared by checkout forms."""

    def __init__(self) -> None:
        self.errors: dict[str, str] = {}
        self.submit_enabled = False

    def apply(self, snapshot: Mapping[str, Any] | None) -> None:
        if present(snapshot, "errors"):
            self.errors = dict(snapshot["errors"] or {})
        if present(snapshot, "submit_enabled"):
            self.submit_enabled = bool(snapshot["submit_enabled"])

    @property
    def error_text(self) -> str:
        return "; ".join(self.errors.values())

    def error_lines(self) -> list[str]:
        if not self.errors:
            return []
        return ["", f"⚠️ <i>{esc(self.error_text)}</i>"]
