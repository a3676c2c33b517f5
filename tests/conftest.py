"""Shared pytest fixtures: broker, sample catalog and a fake storefront API."""
from __future__ import annotations

import pytest

from storefront.core.broker import Broker
from storefront.core.exceptions import ApiException
from storefront.domain.order import OrderRequest, OrderResult
from storefront.domain.product import Product
from storefront.interfaces.bot.session import StorefrontSession


class FakeStorefrontApi:
    """In-memory stand-in for the network collaborator."""

    def __init__(self, products: list[Product] | None = None) -> None:
        self.products = list(products or [])
        self.orders: list[OrderRequest] = []
        self.fail_orders = False
        self.fail_products = False

    async def fetch_products(self) -> list[Product]:
        if self.fail_products:
            raise ApiException("catalog unavailable", status=503)
        return list(self.products)

    async def submit_order(self, order: OrderRequest) -> OrderResult:
        self.orders.append(order)
        if self.fail_orders:
            raise ApiException("Неверная сумма заказа", status=400)
        return OrderResult(id=f"order-{len(self.orders)}", total=order.total)


@pytest.fixture
def broker() -> Broker:
    return Broker()


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(
            id="p-100",
            title="+1 час в сутках",
            description="Если планируете решать задачи в тренажёре",
            image="/Asterisk_2.svg",
            category="софт-скил",
            price=100,
        ),
        Product(
            id="p-free",
            title="Мамка-таймер",
            description="Будет стоять над душой",
            image="/Soft_Flower.svg",
            category="другое",
            price=None,
        ),
        Product(
            id="p-750",
            title="HEX-леденец",
            description="Лизните этот леденец",
            image="/Shell.svg",
            category="хард-скил",
            price=750,
        ),
    ]


@pytest.fixture
def fake_api(products: list[Product]) -> FakeStorefrontApi:
    return FakeStorefrontApi(products)


@pytest.fixture
def session(fake_api: FakeStorefrontApi) -> StorefrontSession:
    return StorefrontSession.create(chat_id=42, api=fake_api, cdn_url="https://larek.test/content/weblarek")
