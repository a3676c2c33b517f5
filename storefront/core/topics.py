"""Event topic taxonomy shared by stores, views and the orchestrator."""
from __future__ import annotations

from enum import Enum


class EventTopic(str, Enum):
    """Broker topics, grouped by the concern that owns them."""

    # Product lifecycle
    PRODUCT_RECEIVED = "product:received"
    PRODUCT_SELECT_CARD = "product:selectCard"
    PRODUCT_SELECTED = "product:selected"
    PRODUCT_SUBMIT = "product:submit"

    # Cart lifecycle
    BASKET_OPEN = "basket:open"
    BASKET_PRODUCT_REMOVE = "basket:productRemove"
    BASKET_LIST_UPDATE = "basket:listUpdate"

    # Customer
    CUSTOMER_RECEIVED = "customer:received"

    # Order form (payment + address)
    ORDER_FORM_OPEN = "orderForm:open"
    ORDER_FORM_PAYMENT_ONLINE_SELECT = "orderForm:paymentOnlineSelect"
    ORDER_FORM_PAYMENT_CASH_SELECT = "orderForm:paymentCashSelect"
    ORDER_FORM_ADDRESS_INPUT = "orderForm:addressInput"
    ORDER_FORM_SUBMIT = "orderForm:submit"
    ORDER_FORM_VALIDATION_ERROR = "orderForm:validationError"

    # Contacts form (email + phone)
    CONTACTS_FORM_EMAIL_INPUT = "contactsForm:emailInput"
    CONTACTS_FORM_PHONE_INPUT = "contactsForm:phoneInput"
    CONTACTS_FORM_SUBMIT = "contactsForm:submit"
    CONTACTS_FORM_VALIDATION_ERROR = "contactsForm:validationError"

    # Modal
    MODAL_CLOSE = "modal:close"
    SUCCESS_MODAL_CLOSE = "successModal:close"

    def __str__(self) -> str:
        return self.value
