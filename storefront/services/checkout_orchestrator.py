"""Checkout workflow orchestrator.

Subscribes to user gestures and store announcements, decides checkout
state transitions, talks to the network collaborator and drives the
presentation units. It is the only component that awaits a failable
operation, and every submission ends in either Success or Failed.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from functools import partial
from typing import Any

from storefront.core.broker import Broker
from storefront.core.constants import (
    BUTTON_TEXT_BUY,
    BUTTON_TEXT_REMOVE,
    BUTTON_TEXT_UNAVAILABLE,
    CURRENCY,
)
from storefront.core.events import (
    AddressInput,
    BasketProductRemove,
    CartChanged,
    ContactsFormValidationError,
    CustomerChanged,
    EmailInput,
    OrderFormValidationError,
    PaymentCashSelected,
    PaymentOnlineSelected,
    PhoneInput,
    ProductCardSelected,
    ProductsReceived,
    emit,
)
from storefront.core.exceptions import SubmissionInProgress
from storefront.core.topics import EventTopic
from storefront.domain.checkout_fsm import (
    MODAL_STATES,
    STEP_FIELDS,
    CheckoutState,
    can_submit_step,
    errors_for_step,
    validate_checkout_transition,
)
from storefront.domain.customer import EMAIL
from storefront.domain.order import OrderRequest, OrderResult
from storefront.domain.product import Product
from storefront.integrations.weblarek_api import StorefrontApi
from storefront.stores.cart import CartStore
from storefront.stores.catalog import CatalogStore
from storefront.stores.customer import CustomerStore
from storefront.views.base import format_amount
from storefront.views.cards import BasketCard, ProductCard
from storefront.views.view_set import ViewSet

logger = logging.getLogger(__name__)

VALIDATION_EVENTS = {
    CheckoutState.ORDER_DETAILS: OrderFormValidationError,
    CheckoutState.CONTACT_DETAILS: ContactsFormValidationError,
}


def preview_button(product: Product, in_cart: bool) -> tuple[str, bool]:
    """Button label and availability for the preview card."""
    if not product.is_priced:
        return BUTTON_TEXT_UNAVAILABLE, False
    if in_cart:
        return BUTTON_TEXT_REMOVE, True
    return BUTTON_TEXT_BUY, True


class CheckoutOrchestrator:
    """Drives Browsing -> ... -> Success/Failed for one session."""

    def __init__(
        self,
        broker: Broker,
        *,
        api: StorefrontApi,
        catalog: CatalogStore,
        cart: CartStore,
        customer: CustomerStore,
        views: ViewSet,
        cdn_url: str = "",
    ) -> None:
        self._broker = broker
        self._api = api
        self._catalog = catalog
        self._cart = cart
        self._customer = customer
        self.views = views
        self._cdn_url = cdn_url.rstrip("/")

        self.state = CheckoutState.BROWSING
        self.product_cards: dict[str, ProductCard] = {}
        self.basket_cards: dict[str, BasketCard] = {}
        self.last_order: OrderResult | None = None
        self._submitting = False
        self._pending: asyncio.Task | None = None
        self._registrations: list[tuple[EventTopic, Callable[[Any], None]]] = []

        self._subscribe()

    # ============= Wiring =============

    def _subscribe(self) -> None:
        handlers: list[tuple[EventTopic, Callable[[Any], None]]] = [
            (EventTopic.PRODUCT_RECEIVED, self._on_products_received),
            (EventTopic.PRODUCT_SELECT_CARD, self._on_product_card_selected),
            (EventTopic.PRODUCT_SELECTED, self._on_product_selected),
            (EventTopic.PRODUCT_SUBMIT, self._on_product_submit),
            (EventTopic.BASKET_LIST_UPDATE, self._on_cart_changed),
            (EventTopic.BASKET_OPEN, self._on_basket_open),
            (EventTopic.BASKET_PRODUCT_REMOVE, self._on_basket_product_remove),
            (EventTopic.CUSTOMER_RECEIVED, self._on_customer_changed),
            (EventTopic.ORDER_FORM_OPEN, self._on_order_form_open),
            (EventTopic.ORDER_FORM_PAYMENT_ONLINE_SELECT, self._on_payment_selected),
            (EventTopic.ORDER_FORM_PAYMENT_CASH_SELECT, self._on_payment_selected),
            (EventTopic.ORDER_FORM_ADDRESS_INPUT, self._on_address_input),
            (EventTopic.ORDER_FORM_SUBMIT, self._on_order_form_submit),
            (EventTopic.CONTACTS_FORM_EMAIL_INPUT, self._on_email_input),
            (EventTopic.CONTACTS_FORM_PHONE_INPUT, self._on_phone_input),
            (EventTopic.CONTACTS_FORM_SUBMIT, self._on_contacts_form_submit),
            (EventTopic.MODAL_CLOSE, self._on_modal_close),
            (EventTopic.SUCCESS_MODAL_CLOSE, self._on_success_close),
        ]
        for topic, handler in handlers:
            self._broker.subscribe(topic, handler)
        self._registrations = handlers

    def detach(self) -> None:
        """Unsubscribe every handler this orchestrator registered."""
        for topic, handler in self._registrations:
            self._broker.unsubscribe(topic, handler)
        self._registrations = []

    # ============= State machine =============

    def _can(self, target: CheckoutState) -> bool:
        return validate_checkout_transition(self.state, target).allowed

    def _transition(self, target: CheckoutState) -> bool:
        result = validate_checkout_transition(self.state, target)
        if not result.allowed:
            logger.warning("Checkout transition rejected: %s", result.reason)
            return False
        if self.state != target:
            logger.debug("Checkout %s -> %s", self.state.value, target.value)
        self.state = target
        return True

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    # ============= Catalog =============

    async def load_catalog(self) -> bool:
        """Fetch the catalog; on failure log and keep the current one."""
        try:
            products = await self._api.fetch_products()
        except Exception:
            logger.exception("Failed to load product catalog")
            return False
        self._catalog.set_products(products)
        return True

    def _image_url(self, image: str) -> str:
        if not image or not self._cdn_url:
            return image
        return f"{self._cdn_url}{image}" if image.startswith("/") else f"{self._cdn_url}/{image}"

    def _card_snapshot(self, product: Product) -> dict[str, Any]:
        return {
            "id": product.id,
            "title": product.title,
            "price": product.price,
            "category": product.category,
            "image": self._image_url(product.image),
        }

    def _on_products_received(self, event: ProductsReceived) -> None:
        self.product_cards = {}
        screens = []
        for product in event.products:
            card = ProductCard(on_click=partial(self._select_card, product.id))
            self.product_cards[product.id] = card
            screens.append(card.render(self._card_snapshot(product)))
        self.views.gallery.render({"cards": screens})

    def _select_card(self, product_id: str) -> None:
        emit(self._broker, ProductCardSelected(product_id=product_id))

    def product_card(self, ref: str) -> ProductCard | None:
        """Gallery card whose buttons carry ``ref``."""
        return next((card for card in self.product_cards.values() if card.ref == ref), None)

    def _on_product_card_selected(self, event: ProductCardSelected) -> None:
        if not self._can(CheckoutState.PREVIEWING):
            logger.debug("Product selection ignored in state %s", self.state.value)
            return
        product = self._catalog.get_product(event.product_id)
        if product is None:
            logger.debug("Selected product %s is not in the catalog", event.product_id)
            return

        button_text, button_enabled = preview_button(product, self._cart.has_product(product.id))
        self.views.preview.render(
            {
                **self._card_snapshot(product),
                "description": product.description,
                "button_text": button_text,
                "button_enabled": button_enabled,
            }
        )
        self._catalog.set_selected(product)

    def _on_product_selected(self, _event: Any) -> None:
        if self._transition(CheckoutState.PREVIEWING):
            self.views.modal.open(self.views.preview)

    def _on_product_submit(self, _event: Any) -> None:
        if self.state != CheckoutState.PREVIEWING:
            return
        product = self._catalog.get_selected()
        if product is not None:
            if self._cart.has_product(product.id):
                self._cart.remove(product)
            elif product.is_priced:
                self._cart.add(product)
            else:
                logger.debug("Unpriced product %s cannot be added", product.id)
        self._catalog.clear_selected()
        self.views.modal.close()
        self._transition(CheckoutState.BROWSING)

    # ============= Cart =============

    def _on_cart_changed(self, event: CartChanged) -> None:
        self.basket_cards = {}
        screens = []
        for index, product in enumerate(event.items, 1):
            card = BasketCard(on_delete=partial(self._remove_from_basket, product.id))
            self.basket_cards[product.id] = card
            screens.append(
                card.render(
                    {
                        "id": product.id,
                        "index": index,
                        "title": product.title,
                        "price": product.price,
                    }
                )
            )
        self.views.basket.render(
            {"items": screens, "total": event.total, "order_enabled": event.total > 0}
        )
        self.views.header.render({"counter": event.count})

    def basket_card(self, ref: str) -> BasketCard | None:
        return next((card for card in self.basket_cards.values() if card.ref == ref), None)

    def _remove_from_basket(self, product_id: str) -> None:
        emit(self._broker, BasketProductRemove(product_id=product_id))

    def _on_basket_open(self, _event: Any) -> None:
        if self._transition(CheckoutState.CART_REVIEW):
            self.views.modal.open(self.views.basket)

    def _on_basket_product_remove(self, event: BasketProductRemove) -> None:
        self._cart.remove(event.product_id)

    # ============= Checkout forms =============

    def _render_forms(self) -> dict[str, str]:
        """Re-render both forms from the customer; returns all current errors."""
        data = self._customer.get_data()
        errors = self._customer.validate()
        order_errors = errors_for_step(CheckoutState.ORDER_DETAILS, errors)
        contact_errors = errors_for_step(CheckoutState.CONTACT_DETAILS, errors)
        self.views.order_form.render(
            {
                "payment": data.payment,
                "address": data.address,
                "errors": order_errors,
                "submit_enabled": not order_errors,
            }
        )
        self.views.contacts_form.render(
            {
                "email": data.email,
                "phone": data.phone,
                "errors": contact_errors,
                "submit_enabled": not contact_errors and not self._submitting,
            }
        )
        return errors

    def _on_order_form_open(self, _event: Any) -> None:
        if self.state != CheckoutState.CART_REVIEW:
            return
        if self._cart.get_total_price() <= 0:
            logger.debug("Checkout ignored: nothing payable in the cart")
            return
        self._render_forms()
        if self._transition(CheckoutState.ORDER_DETAILS):
            self.views.modal.open(self.views.order_form)

    def _on_payment_selected(self, event: PaymentOnlineSelected | PaymentCashSelected) -> None:
        self._customer.set_data(payment=event.payment)

    def _on_address_input(self, event: AddressInput) -> None:
        self._customer.set_data(address=event.address)

    def _on_email_input(self, event: EmailInput) -> None:
        self._customer.set_data(email=event.email)

    def _on_phone_input(self, event: PhoneInput) -> None:
        self._customer.set_data(phone=event.phone)

    def _on_customer_changed(self, _event: CustomerChanged) -> None:
        errors = self._render_forms()
        if self.state not in STEP_FIELDS:
            return
        step_errors = errors_for_step(self.state, errors)
        if step_errors:
            emit(self._broker, VALIDATION_EVENTS[self.state](errors=step_errors))

    def _on_order_form_submit(self, _event: Any) -> None:
        if self.state != CheckoutState.ORDER_DETAILS:
            return
        if not can_submit_step(self.state, self._customer.validate()):
            logger.debug("Order form submit ignored: step has errors")
            return
        self._render_forms()
        if self._transition(CheckoutState.CONTACT_DETAILS):
            self.views.contacts_form.focus(EMAIL)
            self.views.modal.open(self.views.contacts_form)

    # ============= Submission =============

    def _build_order_request(self) -> OrderRequest:
        return OrderRequest.from_checkout(
            self._customer.get_data(),
            items=self._cart.get_product_ids(),
            total=self._cart.get_total_price(),
        )

    def _begin_submission(self) -> OrderRequest | None:
        """Validate, take the in-flight slot and move to Submitting."""
        if self._submitting:
            logger.warning("%s", SubmissionInProgress().message)
            return None
        if self.state != CheckoutState.CONTACT_DETAILS:
            logger.debug("Order submit ignored in state %s", self.state.value)
            return None
        if not can_submit_step(self.state, self._customer.validate()):
            logger.debug("Order submit ignored: contact step has errors")
            return None

        request = self._build_order_request()
        self._submitting = True
        self._transition(CheckoutState.SUBMITTING)
        self.views.contacts_form.render({"submit_enabled": False})
        return request

    async def _send(self, request: OrderRequest) -> None:
        try:
            result = await self._api.submit_order(request)
        except Exception:
            logger.exception("Order submission failed")
            self._submitting = False
            self._fail()
        else:
            self._submitting = False
            self._succeed(result)

    async def submit_order(self) -> None:
        """Submit the current cart and customer as an order."""
        request = self._begin_submission()
        if request is not None:
            await self._send(request)

    async def wait_submission(self) -> None:
        """Wait for an order submission started by a gesture, if any."""
        if self._pending is not None:
            await self._pending

    def _on_contacts_form_submit(self, _event: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error("Order submit needs a running event loop")
            return
        request = self._begin_submission()
        if request is None:
            return
        self._pending = loop.create_task(self._send(request))

    def _succeed(self, result: OrderResult) -> None:
        self.last_order = result
        self._transition(CheckoutState.SUCCESS)
        self.views.success.render({"description": f"Списано {format_amount(result.total)} {CURRENCY}"})
        self.views.modal.open(self.views.success)
        self._cart.clear()
        self._customer.clear()
        self.views.header.counter_clear()

    def _fail(self) -> None:
        self._transition(CheckoutState.FAILED)
        self._transition(CheckoutState.CONTACT_DETAILS)
        self._render_forms()

    # ============= Modal =============

    def _on_modal_close(self, _event: Any) -> None:
        if self.state == CheckoutState.SUBMITTING:
            logger.debug("Close ignored while an order is being submitted")
            return
        if self.state not in MODAL_STATES and not self.views.modal.is_open:
            return
        self.views.modal.close()
        self._catalog.clear_selected()
        self._transition(CheckoutState.BROWSING)

    def _on_success_close(self, _event: Any) -> None:
        if self.state != CheckoutState.SUCCESS:
            return
        self.views.modal.close()
        self._transition(CheckoutState.BROWSING)
