"""Put the session's current page into the chat."""
from __future__ import annotations

import logging

from aiogram import Bot, types
from aiogram.exceptions import TelegramBadRequest

from .session import StorefrontSession

logger = logging.getLogger(__name__)


def _is_not_modified(error: TelegramBadRequest) -> bool:
    return "message is not modified" in str(error).lower()


async def show_page(bot: Bot, session: StorefrontSession, edit: types.Message | None = None) -> None:
    """Edit the page message in place, or send a new one if that is not possible."""
    screen = session.views.page.current()
    text = screen.text or "…"

    if edit is not None:
        try:
            await edit.edit_text(text, parse_mode="HTML", reply_markup=screen.markup)
            session.message_id = edit.message_id
            return
        except TelegramBadRequest as e:
            if _is_not_modified(e):
                return
            logger.warning("Could not edit page in chat %s: %s", session.chat_id, e)

    sent = await bot.send_message(session.chat_id, text, parse_mode="HTML", reply_markup=screen.markup)
    session.message_id = sent.message_id
