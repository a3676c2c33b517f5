"""Inline keyboard callback formats."""
from .callbacks import CartCb, CatalogCb, ContactsCb, ModalCb, NoopCb, OrderCb

__all__ = ["CartCb", "CatalogCb", "ContactsCb", "ModalCb", "NoopCb", "OrderCb"]
