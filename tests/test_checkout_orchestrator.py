"""
End-to-end tests for the checkout workflow.

Each test drives a full session (broker, stores, views, orchestrator)
through view gestures, the same way the Telegram handlers do.
"""
import logging

import pytest

from storefront.core.events import (
    ContactsFormSubmit,
    ModalClose,
    OrderFormOpen,
    ProductCardSelected,
    ProductSubmit,
    emit,
)
from storefront.domain import CheckoutState, CustomerData, Payment
from storefront.domain.product import Product
from storefront.views.base import callback_ref


async def _load(session):
    assert await session.orchestrator.load_catalog()


def _select(session, product_id):
    session.orchestrator.product_cards[product_id].click()


def _buy(session, product_id):
    _select(session, product_id)
    session.views.preview.click_button()


def _button_texts(screen):
    return [button.text for row in screen.rows for button in row]


def _fill_order_step(session):
    session.views.order_form.select_payment("cash")
    session.views.order_form.input_address("Main St 1")


def _fill_contacts_step(session):
    session.views.contacts_form.input_email("shopper@example.com")
    session.views.contacts_form.input_phone("+7 900 000-00-00")


async def _to_contact_step(session):
    await _load(session)
    _buy(session, "p-100")
    session.views.header.click_basket()
    session.views.basket.checkout()
    _fill_order_step(session)
    session.views.order_form.submit()
    _fill_contacts_step(session)


class TestCatalog:
    """Loading and previewing products."""

    @pytest.mark.asyncio
    async def test_load_catalog_renders_gallery(self, session):
        await _load(session)

        assert list(session.orchestrator.product_cards) == ["p-100", "p-free", "p-750"]
        assert len(session.views.gallery.cards) == 3
        page = session.views.page.current()
        assert "🟢 +1 час в сутках · 100 синапсов" in _button_texts(page)
        assert "🛒 Корзина (0)" in _button_texts(page)

    @pytest.mark.asyncio
    async def test_awkward_product_ids(self, session, fake_api):
        """Ids with separators or of any length still render, buy and show in the basket."""
        ids = ["a", "sku:42", "x" * 60 + "b", "c"]
        fake_api.products = [
            Product(id=pid, title=f"Товар {n}", category="другое", price=10)
            for n, pid in enumerate(ids)
        ]
        await _load(session)

        assert len(session.views.gallery.cards) == 4
        page = session.views.page.current()
        callback_data = [button.callback_data for row in page.rows for button in row if button.callback_data]
        assert len(callback_data) >= 4
        assert all(len(data.encode()) <= 64 for data in callback_data)

        for pid in ids:
            card = session.orchestrator.product_card(callback_ref(pid))
            assert card is not None and card.product_id == pid
            card.click()
            session.views.preview.click_button()

        assert session.cart.get_product_ids() == ids
        assert session.views.header.counter == 4

        session.views.header.click_basket()

        assert session.views.basket.total == 40
        assert session.orchestrator.basket_card(callback_ref("sku:42")).product_id == "sku:42"

    @pytest.mark.asyncio
    async def test_image_is_joined_with_cdn(self, session):
        await _load(session)

        card = session.orchestrator.product_cards["p-100"]
        assert card.image == "https://larek.test/content/weblarek/Asterisk_2.svg"

    @pytest.mark.asyncio
    async def test_load_failure_is_logged(self, session, fake_api, caplog):
        fake_api.fail_products = True

        with caplog.at_level(logging.ERROR):
            loaded = await session.orchestrator.load_catalog()

        assert not loaded
        assert session.catalog.get_products() == ()
        assert "Failed to load product catalog" in caplog.text

    @pytest.mark.asyncio
    async def test_select_opens_preview(self, session):
        await _load(session)

        _select(session, "p-750")

        assert session.orchestrator.state == CheckoutState.PREVIEWING
        assert session.views.modal.is_open
        assert session.views.preview.button_text == "Купить"
        assert session.views.preview.button_enabled
        assert session.catalog.get_selected().id == "p-750"
        assert "HEX-леденец" in session.views.page.current().text

    @pytest.mark.asyncio
    async def test_preview_of_product_in_cart_offers_removal(self, session):
        await _load(session)
        _buy(session, "p-100")

        _select(session, "p-100")

        assert session.views.preview.button_text == "Удалить из корзины"

        session.views.preview.click_button()
        assert not session.cart.has_product("p-100")
        assert session.views.header.counter == 0

    @pytest.mark.asyncio
    async def test_unpriced_product_cannot_be_bought(self, session):
        await _load(session)
        _select(session, "p-free")

        assert session.views.preview.button_text == "Недоступно"
        assert not session.views.preview.button_enabled

        # even a forged submit gesture does not add it
        emit(session.broker, ProductSubmit())

        assert session.cart.get_product_count() == 0
        assert session.orchestrator.state == CheckoutState.BROWSING

    @pytest.mark.asyncio
    async def test_selecting_unknown_product_is_ignored(self, session):
        await _load(session)

        emit(session.broker, ProductCardSelected(product_id="gone"))

        assert session.orchestrator.state == CheckoutState.BROWSING
        assert not session.views.modal.is_open


class TestCart:
    """Cart review."""

    @pytest.mark.asyncio
    async def test_scenario_buy_one_and_review(self, session):
        """Load 3 products, buy the 100 one, counter 1, basket total 100."""
        await _load(session)

        _buy(session, "p-100")

        assert session.orchestrator.state == CheckoutState.BROWSING
        assert not session.views.modal.is_open
        assert session.views.header.counter == 1

        session.views.header.click_basket()

        assert session.orchestrator.state == CheckoutState.CART_REVIEW
        assert session.views.basket.total == 100
        assert "Итого: 100 синапсов" in session.views.page.current().text

    @pytest.mark.asyncio
    async def test_scenario_unpriced_item_in_cart(self, session, products):
        """Priced 100 plus unpriced: total 100, count 2."""
        await _load(session)

        session.cart.add(products[0])
        session.cart.add(products[1])

        assert session.views.basket.total == 100
        assert session.views.header.counter == 2
        assert len(session.orchestrator.basket_cards) == 2

    @pytest.mark.asyncio
    async def test_remove_from_basket(self, session):
        await _load(session)
        _buy(session, "p-100")
        _buy(session, "p-750")
        session.views.header.click_basket()

        session.orchestrator.basket_cards["p-100"].delete()

        assert session.cart.get_product_ids() == ["p-750"]
        assert session.views.basket.total == 750
        assert "750 синапсов" in session.views.page.current().text

    @pytest.mark.asyncio
    async def test_checkout_ignored_for_zero_total(self, session, products):
        await _load(session)
        session.cart.add(products[1])
        session.views.header.click_basket()

        assert not session.views.basket.order_enabled

        emit(session.broker, OrderFormOpen())

        assert session.orchestrator.state == CheckoutState.CART_REVIEW

    @pytest.mark.asyncio
    async def test_close_returns_to_browsing(self, session):
        await _load(session)
        session.views.header.click_basket()

        session.views.modal.click_close()

        assert session.orchestrator.state == CheckoutState.BROWSING
        assert not session.views.modal.is_open


class TestCheckout:
    """Order details, contacts and submission."""

    @pytest.mark.asyncio
    async def test_scenario_full_checkout(self, session, fake_api):
        await _load(session)
        _buy(session, "p-100")
        session.views.header.click_basket()
        session.views.basket.checkout()

        assert session.orchestrator.state == CheckoutState.ORDER_DETAILS
        assert not session.views.order_form.status.submit_enabled

        _fill_order_step(session)

        assert session.views.order_form.status.submit_enabled
        session.views.order_form.submit()

        assert session.orchestrator.state == CheckoutState.CONTACT_DETAILS
        assert not session.views.contacts_form.status.submit_enabled

        _fill_contacts_step(session)

        assert session.views.contacts_form.status.submit_enabled
        session.views.contacts_form.submit()
        await session.orchestrator.wait_submission()

        assert session.orchestrator.state == CheckoutState.SUCCESS
        assert session.cart.get_product_count() == 0
        assert session.views.header.counter == 0
        assert session.customer.get_data() == CustomerData()
        assert session.views.success.description == "Списано 100 синапсов"

        order = fake_api.orders[0]
        assert order.payment == Payment.CASH
        assert order.address == "Main St 1"
        assert order.items == ["p-100"]
        assert order.total == 100

        session.views.success.click()

        assert session.orchestrator.state == CheckoutState.BROWSING
        assert not session.views.modal.is_open

    @pytest.mark.asyncio
    async def test_order_step_ignores_contact_fields(self, session):
        """Payment and address are enough even though email/phone are blank."""
        await _load(session)
        _buy(session, "p-100")
        session.views.header.click_basket()
        session.views.basket.checkout()

        _fill_order_step(session)

        assert session.customer.validate().keys() == {"email", "phone"}
        assert session.views.order_form.status.errors == {}

    @pytest.mark.asyncio
    async def test_validation_error_published_for_current_step(self, session):
        errors = []
        session.broker.subscribe("orderForm:validationError", errors.append)
        await _load(session)
        _buy(session, "p-100")
        session.views.header.click_basket()
        session.views.basket.checkout()

        session.views.order_form.select_payment("online")

        assert errors[-1].errors == {"address": "Необходимо указать адрес доставки"}

        session.views.order_form.input_address("Main St 1")

        assert len(errors) == 1

    @pytest.mark.asyncio
    async def test_text_input_fills_focused_contact_field(self, session):
        await _to_contact_step(session)
        session.customer.set_data(email="", phone="")
        session.views.contacts_form.focused = "email"

        session.views.contacts_form.input_text("a@b.c")
        session.views.contacts_form.input_text("123")

        data = session.customer.get_data()
        assert data.email == "a@b.c"
        assert data.phone == "123"

    @pytest.mark.asyncio
    async def test_contacts_step_starts_on_email_every_time(self, session, fake_api):
        """Focus left on phone by a finished order does not leak into the next one."""
        await _load(session)
        _buy(session, "p-100")
        session.views.header.click_basket()
        session.views.basket.checkout()
        _fill_order_step(session)
        session.views.order_form.submit()
        session.views.contacts_form.input_text("first@example.com")
        session.views.contacts_form.input_text("+7 900 000-00-01")
        assert session.views.contacts_form.focused == "phone"
        session.views.contacts_form.submit()
        await session.orchestrator.wait_submission()
        session.views.success.click()

        _buy(session, "p-750")
        session.views.header.click_basket()
        session.views.basket.checkout()
        _fill_order_step(session)
        session.views.order_form.submit()

        assert session.orchestrator.state == CheckoutState.CONTACT_DETAILS
        assert session.views.contacts_form.focused == "email"

        session.views.contacts_form.input_text("second@example.com")

        data = session.customer.get_data()
        assert data.email == "second@example.com"
        assert data.phone == ""
        assert len(fake_api.orders) == 1

    @pytest.mark.asyncio
    async def test_scenario_submission_failure(self, session, fake_api, caplog):
        """Rejected order: back on contacts, nothing cleared, retry works."""
        await _to_contact_step(session)
        customer_before = session.customer.get_data()
        fake_api.fail_orders = True

        with caplog.at_level(logging.ERROR):
            session.views.contacts_form.submit()
            await session.orchestrator.wait_submission()

        assert session.orchestrator.state == CheckoutState.CONTACT_DETAILS
        assert "Order submission failed" in caplog.text
        assert session.cart.get_product_ids() == ["p-100"]
        assert session.customer.get_data() == customer_before
        assert session.views.contacts_form.status.submit_enabled
        assert session.views.modal.content is session.views.contacts_form

        fake_api.fail_orders = False
        session.views.contacts_form.submit()
        await session.orchestrator.wait_submission()

        assert session.orchestrator.state == CheckoutState.SUCCESS
        assert len(fake_api.orders) == 2

    @pytest.mark.asyncio
    async def test_second_submit_while_in_flight_is_ignored(self, session, fake_api):
        await _to_contact_step(session)

        emit(session.broker, ContactsFormSubmit())
        emit(session.broker, ContactsFormSubmit())

        assert session.orchestrator.is_submitting
        assert session.orchestrator.state == CheckoutState.SUBMITTING
        assert not session.views.contacts_form.status.submit_enabled

        await session.orchestrator.wait_submission()

        assert len(fake_api.orders) == 1
        assert not session.orchestrator.is_submitting

    @pytest.mark.asyncio
    async def test_close_ignored_while_submitting(self, session):
        await _to_contact_step(session)

        session.views.contacts_form.submit()
        emit(session.broker, ModalClose())

        assert session.orchestrator.state == CheckoutState.SUBMITTING

        await session.orchestrator.wait_submission()

        assert session.orchestrator.state == CheckoutState.SUCCESS

    @pytest.mark.asyncio
    async def test_submit_order_coroutine(self, session, fake_api):
        await _to_contact_step(session)

        await session.orchestrator.submit_order()

        assert session.orchestrator.state == CheckoutState.SUCCESS
        assert session.orchestrator.last_order.id == "order-1"

    @pytest.mark.asyncio
    async def test_closing_order_form_keeps_customer_data(self, session):
        await _load(session)
        _buy(session, "p-100")
        session.views.header.click_basket()
        session.views.basket.checkout()
        _fill_order_step(session)

        session.views.modal.click_close()

        assert session.orchestrator.state == CheckoutState.BROWSING
        assert session.customer.get_data().address == "Main St 1"


class TestDetach:
    @pytest.mark.asyncio
    async def test_detached_orchestrator_stops_reacting(self, session):
        await _load(session)
        session.orchestrator.detach()

        session.views.header.click_basket()

        assert session.orchestrator.state == CheckoutState.BROWSING
