"""
Tests for presentation units.

Tests:
- partial render semantics
- price/category formatting
- disabled buttons
- gestures published through the broker
"""
from storefront.core.events import (
    BasketOpen,
    ContactsFormSubmit,
    EmailInput,
    ModalClose,
    OrderFormOpen,
    OrderFormSubmit,
    PaymentCashSelected,
    PhoneInput,
    ProductSubmit,
    SuccessModalClose,
)
from storefront.domain import Payment
from storefront.keyboards.callbacks import CartCb, CatalogCb, ModalCb, NoopCb
from storefront.views import (
    Basket,
    BasketCard,
    ContactsForm,
    Gallery,
    Header,
    Modal,
    OrderForm,
    PreviewCard,
    ProductCard,
    Screen,
    SuccessForm,
    ViewSet,
)
from storefront.views.base import callback_ref, format_price


def _record(broker):
    received = []
    broker.subscribe("*", received.append)
    return received


def _buttons(screen: Screen):
    return [button for row in screen.rows for button in row]


def _texts(screen: Screen):
    return [button.text for button in _buttons(screen)]


class TestFormatting:
    def test_price_with_currency(self):
        assert format_price(750) == "750 синапсов"
        assert format_price(12.5) == "12.50 синапсов"

    def test_unpriced(self):
        assert format_price(None) == "Бесценно"

    def test_callback_ref_fits_callback_data(self):
        """Any product id becomes a short token without the ':' separator."""
        long_id = "x" * 200
        refs = {callback_ref(pid) for pid in ("a", "sku:42", long_id, "c")}

        assert len(refs) == 4
        assert all(len(ref) == 12 and ":" not in ref for ref in refs)
        assert callback_ref("sku:42") == callback_ref("sku:42")
        assert len(CatalogCb(action="submit", ref=callback_ref(long_id)).pack().encode()) <= 64


class TestHeader:
    def test_counter_and_basket_gesture(self, broker):
        received = _record(broker)
        header = Header(broker)

        screen = header.render({"counter": 3})
        header.click_basket()

        assert "🛒 Корзина (3)" in _texts(screen)
        assert _buttons(screen)[0].callback_data == CartCb(action="open").pack()
        assert received == [BasketOpen()]

    def test_render_without_counter_keeps_value(self, broker):
        header = Header(broker)
        header.render({"counter": 2})

        header.render({})

        assert header.counter == 2

    def test_counter_clear(self, broker):
        header = Header(broker)
        header.render({"counter": 5})

        header.counter_clear()

        assert header.counter == 0


class TestCards:
    def test_product_card_renders_marker_and_price(self):
        card = ProductCard()

        screen = card.render({"id": "p-1", "title": "HEX-леденец", "price": 750, "category": "хард-скил"})

        assert _texts(screen) == ["🟠 HEX-леденец · 750 синапсов"]
        assert _buttons(screen)[0].callback_data == CatalogCb(action="select", ref=callback_ref("p-1")).pack()

    def test_product_card_click_calls_back(self):
        clicks = []
        card = ProductCard(on_click=lambda: clicks.append(1))

        card.click()

        assert clicks == [1]

    def test_partial_render_keeps_other_fields(self):
        card = ProductCard()
        card.render({"id": "p-1", "title": "Старое", "price": 100})

        screen = card.render({"price": None})

        assert card.face.title == "Старое"
        assert "Бесценно" in screen.text

    def test_long_titles_are_shortened_on_buttons(self):
        card = ProductCard()

        screen = card.render({"id": "p", "title": "x" * 100, "price": 1})

        assert "..." in _texts(screen)[0]
        assert len(_texts(screen)[0]) < 100

    def test_preview_disabled_button_is_locked(self, broker):
        received = _record(broker)
        preview = PreviewCard(broker)

        screen = preview.render(
            {"id": "p", "title": "Мамка-таймер", "price": None, "button_text": "Недоступно", "button_enabled": False}
        )
        preview.click_button()

        assert _texts(screen) == ["🔒 Недоступно"]
        assert _buttons(screen)[0].callback_data == NoopCb(reason="disabled").pack()
        assert received == []

    def test_preview_enabled_button_submits(self, broker):
        received = _record(broker)
        preview = PreviewCard(broker)

        screen = preview.render(
            {
                "id": "p",
                "title": "+1 час",
                "price": 100,
                "description": "Описание",
                "image": "https://cdn/x.svg",
                "button_text": "Купить",
                "button_enabled": True,
            }
        )
        preview.click_button()

        assert _texts(screen) == ["Купить"]
        assert "Описание" in screen.text
        assert "https://cdn/x.svg" in screen.text
        assert received == [ProductSubmit()]

    def test_basket_card_delete(self):
        deleted = []
        card = BasketCard(on_delete=lambda: deleted.append("p"))

        screen = card.render({"id": "p", "index": 2, "title": "HEX", "price": 750})
        card.delete()

        assert screen.text.startswith("2. HEX")
        assert _buttons(screen)[0].callback_data == CartCb(action="remove", ref=callback_ref("p")).pack()
        assert deleted == ["p"]


class TestGalleryAndBasket:
    def test_gallery_concatenates_card_rows(self):
        cards = [ProductCard().render({"id": str(i), "title": f"T{i}", "price": i}) for i in range(3)]

        screen = Gallery().render({"cards": cards})

        assert len(screen.rows) == 3

    def test_empty_gallery(self):
        screen = Gallery().render({"cards": []})

        assert screen.markup is None

    def test_empty_basket_disables_checkout(self, broker):
        received = _record(broker)
        basket = Basket(broker)

        screen = basket.render({"items": [], "total": 0, "order_enabled": False})
        basket.checkout()

        assert "Корзина пуста" in screen.text
        assert "🔒 Оформить" in _texts(screen)
        assert received == []

    def test_basket_total_and_checkout(self, broker):
        received = _record(broker)
        basket = Basket(broker)
        line = BasketCard().render({"id": "p", "index": 1, "title": "HEX", "price": 100})

        screen = basket.render({"items": [line], "total": 100, "order_enabled": True})
        basket.checkout()

        assert "Итого: 100 синапсов" in screen.text
        assert "Оформить" in _texts(screen)
        assert received == [OrderFormOpen()]


class TestForms:
    def test_order_form_marks_payment_and_errors(self, broker):
        form = OrderForm(broker)

        screen = form.render(
            {"payment": Payment.CASH, "address": "", "errors": {"address": "Необходимо указать адрес доставки"}}
        )

        assert "✅ При получении" in _texts(screen)
        assert "Онлайн" in _texts(screen)
        assert "Необходимо указать адрес доставки" in screen.text
        assert "🔒 Далее" in _texts(screen)

    def test_order_form_gestures(self, broker):
        received = _record(broker)
        form = OrderForm(broker)

        form.select_payment("cash")
        form.input_address("Main St 1")
        form.submit()
        form.render({"submit_enabled": True})
        form.submit()

        assert received[0] == PaymentCashSelected(payment=Payment.CASH)
        assert received[1].address == "Main St 1"
        assert received[2:] == [OrderFormSubmit()]

    def test_contacts_form_routes_text_by_focus(self, broker):
        received = _record(broker)
        form = ContactsForm(broker)

        form.input_text("a@b.c")
        form.input_text("+7 900")

        assert received == [EmailInput(email="a@b.c"), PhoneInput(phone="+7 900")]

    def test_contacts_focus_and_guarded_submit(self, broker):
        received = _record(broker)
        form = ContactsForm(broker)

        screen = form.focus("phone")
        form.submit()
        form.render({"submit_enabled": True})
        form.submit()

        assert form.focused == "phone"
        assert "✅ 📞 Телефон" in _texts(screen)
        assert received == [ContactsFormSubmit()]

    def test_success_form(self, broker):
        received = _record(broker)
        success = SuccessForm(broker)

        screen = success.render({"description": "Списано 850 синапсов"})
        success.click()

        assert "Списано 850 синапсов" in screen.text
        assert _buttons(screen)[0].callback_data == ModalCb(action="success").pack()
        assert received == [SuccessModalClose()]


class TestModalAndPage:
    def test_modal_appends_close_button(self, broker):
        modal = Modal(broker)

        screen = modal.open(Screen(text="hello"))

        assert modal.is_open
        assert screen.text == "hello"
        assert _buttons(screen)[-1].callback_data == ModalCb(action="close").pack()

    def test_modal_tracks_live_view(self, broker):
        """Re-rendering the hosted view shows up without reopening."""
        modal = Modal(broker)
        form = ContactsForm(broker)
        modal.open(form)

        form.render({"email": "late@b.c"})

        assert "late@b.c" in modal.render().text

    def test_modal_close_gesture(self, broker):
        received = _record(broker)
        modal = Modal(broker)

        modal.click_close()

        assert received == [ModalClose()]

    def test_page_shows_modal_or_catalog(self, broker):
        views = ViewSet.create(broker)
        views.gallery.render({"cards": [ProductCard().render({"id": "p", "title": "T", "price": 1})]})
        views.header.render({"counter": 1})

        page = views.page.current()
        assert "Каталог" in page.text
        assert "🛒 Корзина (1)" in _texts(page)

        views.modal.open(views.basket)
        assert "Корзина" in views.page.current().text
        assert "Каталог" not in views.page.current().text

        views.modal.close()
        assert "Каталог" in views.page.current().text
