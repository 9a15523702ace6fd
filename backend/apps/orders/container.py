from __future__ import annotations

from apps.carts.container import build_cart_store
from apps.remote.session import StorefrontSession
from .repositories import RemoteFeeRepository, RemoteOrderRepository
from .services import CheckoutService, OrderService


def build_order_service(session: StorefrontSession) -> OrderService:
    return OrderService(repository=RemoteOrderRepository(session.client))


def build_checkout_service(session: StorefrontSession) -> CheckoutService:
    return CheckoutService(
        orders=RemoteOrderRepository(session.client),
        fees=RemoteFeeRepository(session.client),
        cart=build_cart_store(session),
    )
