"""Presentation units."""
from .base import Renderable, Screen
from .basket import Basket
from .cards import BasketCard, PreviewCard, ProductCard
from .forms import ContactsForm, OrderForm
from .gallery import Gallery
from .header import Header
from .modal import Modal
from .page import Page
from .success import SuccessForm
from .view_set import ViewSet

__all__ = [
    "Basket",
    "BasketCard",
    "ContactsForm",
    "Gallery",
    "Header",
    "Modal",
    "OrderForm",
    "Page",
    "PreviewCard",
    "ProductCard",
    "Renderable",
    "Screen",
    "SuccessForm",
    "ViewSet",
]
