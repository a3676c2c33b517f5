"""Callback data factories: the wire format of button gestures."""
from __future__ import annotations

from aiogram.filters.callback_data import CallbackData


# Product ids are opaque and may not fit callback data; buttons carry
# ``callback_ref(product_id)`` instead.
class CatalogCb(CallbackData, prefix="cat"):
    """select: open a product preview; submit: add/remove the previewed product."""

    action: str
    ref: str = ""


class CartCb(CallbackData, prefix="cart"):
    """open: show the basket; remove: drop a line; checkout: go to the order form."""

    action: str
    ref: str = ""


class OrderCb(CallbackData, prefix="order"):
    """payment: choose a payment method; submit: continue to contacts."""

    action: str
    value: str = ""


class ContactsCb(CallbackData, prefix="contacts"):
    """focus: choose which field text input fills; submit: place the order."""

    action: str
    value: str = ""


class ModalCb(CallbackData, prefix="modal"):
    """close: dismiss the modal; success: dismiss the confirmation."""

    action: str


class NoopCb(CallbackData, prefix="noop"):
    """Disabled buttons and labels."""

    reason: str = ""
