"""
Storefront Telegram Bot - entry point.

Browse the catalog, collect a basket and place an order from a chat.
Architecture: event-driven core (storefront/) behind an aiogram 3.x router.
"""
from __future__ import annotations

import asyncio
import sys

from storefront.core.bootstrap import build_application
from storefront.core.config import load_settings
from storefront.core.exceptions import ConfigurationException
from storefront.core.logging_config import setup_logging


async def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationException as e:
        setup_logging()
        print(f"❌ {e.message}", file=sys.stderr)
        sys.exit(1)

    logger = setup_logging(settings.log_level)
    bot, dp, registry, api = build_application(settings)

    logger.info("Starting storefront bot (polling)")
    try:
        await bot.delete_webhook(drop_pending_updates=True)
        await dp.start_polling(bot)
    finally:
        logger.info("Shutting down, %d sessions", len(registry))
        await api.close()
        await bot.session.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
