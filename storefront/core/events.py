"""Typed event payloads, one shape per topic.

Every payload class carries the topic it travels on, so publishers use
``emit(broker, event)`` and subscribers can rely on the concrete shape.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Union

from .topics import EventTopic

if TYPE_CHECKING:
    from storefront.domain.customer import CustomerData, Payment
    from storefront.domain.product import Product

    from .broker import Broker, DeliveryReport


# ============= Product lifecycle =============


@dataclass(frozen=True, slots=True)
class ProductsReceived:
    topic: ClassVar[EventTopic] = EventTopic.PRODUCT_RECEIVED
    products: tuple[Product, ...]


@dataclass(frozen=True, slots=True)
class ProductCardSelected:
    """User picked a card in the gallery."""

    topic: ClassVar[EventTopic] = EventTopic.PRODUCT_SELECT_CARD
    product_id: str


@dataclass(frozen=True, slots=True)
class ProductSelected:
    """Catalog now inspects ``product``."""

    topic: ClassVar[EventTopic] = EventTopic.PRODUCT_SELECTED
    product: Product


@dataclass(frozen=True, slots=True)
class ProductSubmit:
    """Add/remove button pressed on the preview card."""

    topic: ClassVar[EventTopic] = EventTopic.PRODUCT_SUBMIT


# ============= Cart lifecycle =============


@dataclass(frozen=True, slots=True)
class BasketOpen:
    topic: ClassVar[EventTopic] = EventTopic.BASKET_OPEN


@dataclass(frozen=True, slots=True)
class BasketProductRemove:
    topic: ClassVar[EventTopic] = EventTopic.BASKET_PRODUCT_REMOVE
    product_id: str


@dataclass(frozen=True, slots=True)
class CartChanged:
    topic: ClassVar[EventTopic] = EventTopic.BASKET_LIST_UPDATE
    items: tuple[Product, ...]
    total: float
    count: int


# ============= Customer =============


@dataclass(frozen=True, slots=True)
class CustomerChanged:
    topic: ClassVar[EventTopic] = EventTopic.CUSTOMER_RECEIVED
    customer: CustomerData


# ============= Order form =============


@dataclass(frozen=True, slots=True)
class OrderFormOpen:
    topic: ClassVar[EventTopic] = EventTopic.ORDER_FORM_OPEN


@dataclass(frozen=True, slots=True)
class PaymentOnlineSelected:
    topic: ClassVar[EventTopic] = EventTopic.ORDER_FORM_PAYMENT_ONLINE_SELECT
    payment: Payment


@dataclass(frozen=True, slots=True)
class PaymentCashSelected:
    topic: ClassVar[EventTopic] = EventTopic.ORDER_FORM_PAYMENT_CASH_SELECT
    payment: Payment


@dataclass(frozen=True, slots=True)
class AddressInput:
    topic: ClassVar[EventTopic] = EventTopic.ORDER_FORM_ADDRESS_INPUT
    address: str


@dataclass(frozen=True, slots=True)
class OrderFormSubmit:
    topic: ClassVar[EventTopic] = EventTopic.ORDER_FORM_SUBMIT


@dataclass(frozen=True, slots=True)
class OrderFormValidationError:
    topic: ClassVar[EventTopic] = EventTopic.ORDER_FORM_VALIDATION_ERROR
    errors: dict[str, str] = field(default_factory=dict)


# ============= Contacts form =============


@dataclass(frozen=True, slots=True)
class EmailInput:
    topic: ClassVar[EventTopic] = EventTopic.CONTACTS_FORM_EMAIL_INPUT
    email: str


@dataclass(frozen=True, slots=True)
class PhoneInput:
    topic: ClassVar[EventTopic] = EventTopic.CONTACTS_FORM_PHONE_INPUT
    phone: str


@dataclass(frozen=True, slots=True)
class ContactsFormSubmit:
    topic: ClassVar[EventTopic] = EventTopic.CONTACTS_FORM_SUBMIT


@dataclass(frozen=True, slots=True)
class ContactsFormValidationError:
    topic: ClassVar[EventTopic] = EventTopic.CONTACTS_FORM_VALIDATION_ERROR
    errors: dict[str, str] = field(default_factory=dict)


# ============= Modal =============


@dataclass(frozen=True, slots=True)
class ModalClose:
    topic: ClassVar[EventTopic] = EventTopic.MODAL_CLOSE


@dataclass(frozen=True, slots=True)
class SuccessModalClose:
    topic: ClassVar[EventTopic] = EventTopic.SUCCESS_MODAL_CLOSE


Event = Union[
    ProductsReceived,
    ProductCardSelected,
    ProductSelected,
    ProductSubmit,
    BasketOpen,
    BasketProductRemove,
    CartChanged,
    CustomerChanged,
    OrderFormOpen,
    PaymentOnlineSelected,
    PaymentCashSelected,
    AddressInput,
    OrderFormSubmit,
    OrderFormValidationError,
    EmailInput,
    PhoneInput,
    ContactsFormSubmit,
    ContactsFormValidationError,
    ModalClose,
    SuccessModalClose,
]

TOPIC_PAYLOADS: dict[EventTopic, type] = {cls.topic: cls for cls in Event.__args__}


def payload_type(topic: EventTopic | str) -> type:
    """Payload class carried on ``topic``."""
    return TOPIC_PAYLOADS[EventTopic(topic)]


def emit(broker: Broker, event: Any) -> DeliveryReport:
    """Publish ``event`` on the topic its class declares."""
    if type(event) not in TOPIC_PAYLOADS.values():
        raise TypeError(f"Not an event payload: {event!r}")
    return broker.publish(event.topic, event)
