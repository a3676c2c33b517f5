"""The set of presentation units one storefront session drives."""
from __future__ import annotations

from dataclasses import dataclass, field

from storefront.core.broker import Broker

from .basket import Basket
from .cards import PreviewCard
from .forms import ContactsForm, OrderForm
from .gallery import Gallery
from .header import Header
from .modal import Modal
from .page import Page
from .success import SuccessForm


@dataclass
class ViewSet:
    header: Header
    gallery: Gallery
    modal: Modal
    preview: PreviewCard
    basket: Basket
    order_form: OrderForm
    contacts_form: ContactsForm
    success: SuccessForm
    page: Page = field(init=False)

    def __post_init__(self) -> None:
        self.page = Page(self.header, self.gallery, self.modal)

    @classmethod
    def create(cls, broker: Broker) -> "ViewSet":
        return cls(
            header=Header(broker),
            gallery=Gallery(),
            modal=Modal(broker),
            preview=PreviewCard(broker),
            basket=Basket(broker),
            order_form=OrderForm(broker),
            contacts_form=ContactsForm(broker),
            success=SuccessForm(broker),
        )
