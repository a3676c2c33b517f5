"""Checkout forms: payment/address and contacts."""
from __future__ import annotations

from typing import TypedDict

from storefront.core.broker import Broker
from storefront.core.constants import (
    BUTTON_TEXT_NEXT,
    BUTTON_TEXT_PAY,
    BUTTON_TEXT_PAYMENT_CASH,
    BUTTON_TEXT_PAYMENT_ONLINE,
)
from storefront.core.events import (
    AddressInput,
    ContactsFormSubmit,
    EmailInput,
    OrderFormSubmit,
    PaymentCashSelected,
    PaymentOnlineSelected,
    PhoneInput,
    emit,
)
from storefront.domain.customer import EMAIL, PHONE, Payment
from storefront.keyboards.callbacks import ContactsCb, OrderCb

from .base import FormStatus, Screen, build_markup, callback_button, esc, present, toggle_button


class OrderFormSnapshot(TypedDict, total=False):
    payment: Payment
    address: str
    errors: dict[str, str]
    submit_enabled: bool


class ContactsFormSnapshot(TypedDict, total=False):
    email: str
    phone: str
    errors: dict[str, str]
    submit_enabled: bool


def _mark(selected: bool, text: str) -> str:
    return f"✅ {text}" if selected else text


class OrderForm:
    """Payment method buttons, delivery address and the next-step button."""

    def __init__(self, broker: Broker) -> None:
        self._broker = broker
        self.status = FormStatus()
        self.payment = Payment.UNSET
        self.address = ""

    def render(self, snapshot: OrderFormSnapshot | None = None) -> Screen:
        self.status.apply(snapshot)
        if present(snapshot, "payment"):
            self.payment = Payment.parse(snapshot["payment"])
        if present(snapshot, "address"):
            self.address = snapshot["address"] or ""

        lines = [
            "📝 <b>Способ оплаты</b>",
            "",
            "📍 <b>Адрес доставки</b>",
            esc(self.address) if self.address else "<i>Отправьте адрес сообщением</i>",
        ]
        lines.extend(self.status.error_lines())

        rows = [
            [
                callback_button(
                    _mark(self.payment == Payment.ONLINE, BUTTON_TEXT_PAYMENT_ONLINE),
                    OrderCb(action="payment", value=Payment.ONLINE.value),
                ),
                callback_button(
                    _mark(self.payment == Payment.CASH, BUTTON_TEXT_PAYMENT_CASH),
                    OrderCb(action="payment", value=Payment.CASH.value),
                ),
            ],
            [toggle_button(BUTTON_TEXT_NEXT, OrderCb(action="submit"), self.status.submit_enabled)],
        ]
        return Screen(text="\n".join(lines), markup=build_markup(rows))

    def select_payment(self, method: Payment | str) -> None:
        payment = Payment.parse(method)
        if payment == Payment.ONLINE:
            emit(self._broker, PaymentOnlineSelected(payment=payment))
        elif payment == Payment.CASH:
            emit(self._broker, PaymentCashSelected(payment=payment))

    def input_address(self, address: str) -> None:
        emit(self._broker, AddressInput(address=address))

    def submit(self) -> None:
        if not self.status.submit_enabled:
            return
        emit(self._broker, OrderFormSubmit())


class ContactsForm:
    """Email and phone inputs. Free text goes to the focused field."""

    FIELD_LABELS = {EMAIL: "✉️ Email", PHONE: "📞 Телефон"}

    def __init__(self, broker: Broker) -> None:
        self._broker = broker
        self.status = FormStatus()
        self.email = ""
        self.phone = ""
        self.focused = EMAIL

    def render(self, snapshot: ContactsFormSnapshot | None = None) -> Screen:
        self.status.apply(snapshot)
        if present(snapshot, "email"):
            self.email = snapshot["email"] or ""
        if present(snapshot, "phone"):
            self.phone = snapshot["phone"] or ""

        lines = [
            "📇 <b>Контакты</b>",
            "",
            f"✉️ Email: {esc(self.email) or '—'}",
            f"📞 Телефон: {esc(self.phone) or '—'}",
            "",
            f"<i>Сейчас вводится: {self.FIELD_LABELS[self.focused]}</i>",
        ]
        lines.extend(self.status.error_lines())

        rows = [
            [
                callback_button(
                    _mark(self.focused == name, label),
                    ContactsCb(action="focus", value=name),
                )
                for name, label in self.FIELD_LABELS.items()
            ],
            [toggle_button(BUTTON_TEXT_PAY, ContactsCb(action="submit"), self.status.submit_enabled)],
        ]
        return Screen(text="\n".join(lines), markup=build_markup(rows))

    def focus(self, field_name: str) -> Screen:
        if field_name in self.FIELD_LABELS:
            self.focused = field_name
        return self.render()

    def input_text(self, text: str) -> None:
        """Route free text to the focused field; email input moves focus to phone."""
        if self.focused == EMAIL:
            self.input_email(text)
            self.focused = PHONE
        else:
            self.input_phone(text)

    def input_email(self, email: str) -> None:
        emit(self._broker, EmailInput(email=email))

    def input_phone(self, phone: str) -> None:
        emit(self._broker, PhoneInput(phone=phone))

    def submit(self) -> None:
        if not self.status.submit_enabled:
            return
        emit(self._broker, ContactsFormSubmit())
