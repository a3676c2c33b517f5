"""Telegram handlers: translate updates into view gestures.

Every handler resolves the chat's session, pokes the presentation unit
the button belongs to and then shows whatever the page looks like now.
"""
from __future__ import annotations

import logging

from aiogram import Bot, F, Router, types
from aiogram.filters import Command, CommandStart

from storefront.domain.checkout_fsm import CheckoutState
from storefront.keyboards.callbacks import CartCb, CatalogCb, ContactsCb, ModalCb, NoopCb, OrderCb

from .presenters import show_page
from .session import SessionRegistry, StorefrontSession

logger = logging.getLogger(__name__)

router = Router(name="storefront")

# Module dependencies
registry: SessionRegistry | None = None

STALE_TEXT = "Каталог обновился, нажмите /start"
CATALOG_ERROR_TEXT = "⚠️ Не удалось загрузить каталог, попробуйте позже"


def setup_dependencies(session_registry: SessionRegistry) -> None:
    """Setup module dependencies."""
    global registry
    registry = session_registry


def _session(chat_id: int) -> StorefrontSession:
    if registry is None:
        raise RuntimeError("storefront handlers used before setup_dependencies()")
    return registry.get(chat_id)


def _callback_session(callback: types.CallbackQuery) -> StorefrontSession:
    chat_id = callback.message.chat.id if callback.message else callback.from_user.id
    return _session(chat_id)


def _page_message(callback: types.CallbackQuery) -> types.Message | None:
    return callback.message if isinstance(callback.message, types.Message) else None


@router.message(CommandStart())
async def cmd_start(message: types.Message, bot: Bot) -> None:
    session = _session(message.chat.id)
    loaded = await session.orchestrator.load_catalog()
    if not loaded and not session.catalog.get_products():
        await message.answer(CATALOG_ERROR_TEXT)
        return
    await show_page(bot, session)


@router.message(Command("cart"))
async def cmd_cart(message: types.Message, bot: Bot) -> None:
    session = _session(message.chat.id)
    session.views.header.click_basket()
    await show_page(bot, session)


@router.callback_query(CatalogCb.filter())
async def on_catalog(callback: types.CallbackQuery, callback_data: CatalogCb, bot: Bot) -> None:
    session = _callback_session(callback)
    if callback_data.action == "select":
        card = session.orchestrator.product_card(callback_data.ref)
        if card is None:
            await callback.answer(STALE_TEXT, show_alert=True)
            return
        card.click()
    elif callback_data.action == "submit":
        if session.views.preview.ref != callback_data.ref:
            await callback.answer(STALE_TEXT)
            return
        session.views.preview.click_button()
    await show_page(bot, session, edit=_page_message(callback))
    await callback.answer()


@router.callback_query(CartCb.filter())
async def on_cart(callback: types.CallbackQuery, callback_data: CartCb, bot: Bot) -> None:
    session = _callback_session(callback)
    if callback_data.action == "open":
        session.views.header.click_basket()
    elif callback_data.action == "remove":
        card = session.orchestrator.basket_card(callback_data.ref)
        if card is not None:
            card.delete()
    elif callback_data.action == "checkout":
        session.views.basket.checkout()
    await show_page(bot, session, edit=_page_message(callback))
    await callback.answer()


@router.callback_query(OrderCb.filter())
async def on_order_form(callback: types.CallbackQuery, callback_data: OrderCb, bot: Bot) -> None:
    session = _callback_session(callback)
    if callback_data.action == "payment":
        try:
            session.views.order_form.select_payment(callback_data.value)
        except ValueError:
            logger.warning("Unknown payment method in callback: %r", callback_data.value)
            await callback.answer()
            return
    elif callback_data.action == "submit":
        session.views.order_form.submit()
    await show_page(bot, session, edit=_page_message(callback))
    await callback.answer()


@router.callback_query(ContactsCb.filter())
async def on_contacts_form(callback: types.CallbackQuery, callback_data: ContactsCb, bot: Bot) -> None:
    session = _callback_session(callback)
    if callback_data.action == "focus":
        session.views.contacts_form.focus(callback_data.value)
    elif callback_data.action == "submit":
        session.views.contacts_form.submit()
        await show_page(bot, session, edit=_page_message(callback))
        # answer before the order request; slow APIs outlive the callback query
        await callback.answer()
        await session.orchestrator.wait_submission()
        await show_page(bot, session, edit=_page_message(callback))
        return
    await show_page(bot, session, edit=_page_message(callback))
    await callback.answer()


@router.callback_query(ModalCb.filter())
async def on_modal(callback: types.CallbackQuery, callback_data: ModalCb, bot: Bot) -> None:
    session = _callback_session(callback)
    if callback_data.action == "close":
        session.views.modal.click_close()
    elif callback_data.action == "success":
        session.views.success.click()
    await show_page(bot, session, edit=_page_message(callback))
    await callback.answer()


@router.callback_query(NoopCb.filter())
async def on_noop(callback: types.CallbackQuery) -> None:
    await callback.answer()


@router.message(F.text & ~F.text.startswith("/"))
async def on_text(message: types.Message, bot: Bot) -> None:
    """Free text fills the field the current checkout step is waiting for."""
    session = _session(message.chat.id)
    state = session.orchestrator.state
    if state == CheckoutState.ORDER_DETAILS:
        session.views.order_form.input_address(message.text)
    elif state == CheckoutState.CONTACT_DETAILS:
        session.views.contacts_form.input_text(message.text)
    else:
        logger.debug("Text ignored in state %s", state.value)
        return
    await show_page(bot, session)
