"""Application bootstrap wiring bot, dispatcher, API client and sessions."""
from __future__ import annotations

import logging

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage

from storefront.integrations.weblarek_api import WeblarekApiClient
from storefront.interfaces.bot import SessionRegistry, router, setup_dependencies

from .config import Settings

logger = logging.getLogger(__name__)


def build_registry(settings: Settings, api: WeblarekApiClient) -> SessionRegistry:
    return SessionRegistry(
        api,
        cdn_url=settings.api.cdn_url,
        max_depth=settings.broker_max_depth,
        max_sessions=settings.max_sessions,
    )


def build_application(settings: Settings):
    """Create bot runtime components from configuration."""
    bot = Bot(token=settings.bot_token)
    api = WeblarekApiClient(settings.api.api_url, timeout=settings.api.timeout)
    registry = build_registry(settings, api)

    # Session state lives in the registry; FSM storage stays in memory
    dispatcher = Dispatcher(storage=MemoryStorage())
    setup_dependencies(registry)
    dispatcher.include_router(router)
    logger.info("Storefront API at %s", settings.api.api_url)

    return bot, dispatcher, registry, api
