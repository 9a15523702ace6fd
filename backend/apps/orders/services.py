from __future__ import annotations

from typing import Any, Dict, List, Optional

from apps.carts.services import CartStore
from apps.common import get_logger
from apps.common.currency import parse_price
from .commands import PlaceOrderCommand
from .dtos import CheckoutSummaryDTO, DeliveryFeeDTO, OrderDTO, PlacedOrderDTO
from .mappers import DeliveryFeeMapper, OrderMapper
from .protocols import FeeRepositoryProtocol, OrderRepositoryProtocol

logger = get_logger(__name__).bind(component="orders", layer="service")


class EmptyCartError(Exception):
    pass


class OrderService:
    def __init__(self, repository: OrderRepositoryProtocol):
        self.repository = repository
        self.logger = logger.bind(service="OrderService")

    def list_orders(self) -> List[OrderDTO]:
        orders = OrderMapper.many_from_raw(self.repository.fetch_orders())
        self.logger.debug("Orders listed", count=len(orders))
        return orders

    def get_order(self, order_id: str) -> Optional[OrderDTO]:
        raw = self.repository.fetch_order(order_id)
        if raw is None:
            return None
        return OrderMapper.from_raw(raw)

    def delete_order(self, order_id: str) -> None:
        self.logger.info("Deleting order", order_id=order_id)
        self.repository.delete_order(order_id)


class CheckoutService:
    """
    Checkout flow over the session cart: fee lookup, totals and order placement.
    """

    def __init__(
        self,
        orders: OrderRepositoryProtocol,
        fees: FeeRepositoryProtocol,
        cart: CartStore,
    ):
        self.orders = orders
        self.fees = fees
        self.cart = cart
        self.logger = logger.bind(service="CheckoutService")

    def delivery_fees(self) -> List[DeliveryFeeDTO]:
        return DeliveryFeeMapper.many_from_raw(self.fees.fetch_delivery_fees())

    def service_fee(self) -> float:
        return parse_price(self.fees.fetch_service_fee().get("fee"))

    def location_fee(self, fee_location: Optional[str]) -> float:
        if not fee_location:
            return 0.0
        for fee in self.delivery_fees():
            if fee.is_active and fee.location == fee_location:
                return fee.fee
        return 0.0

    def summary(self, fee_location: Optional[str] = None) -> CheckoutSummaryDTO:
        state = self.cart.load_cart()
        service_fee = self.service_fee()
        location_fee = self.location_fee(fee_location)
        return CheckoutSummaryDTO(
            subtotal=state.subtotal,
            service_fee=service_fee,
            location_fee=location_fee,
            total=state.subtotal + service_fee + location_fee,
            fee_location=fee_location,
            item_count=state.item_count,
        )

    def _order_items(self) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        for item in self.cart.state.items:
            if item.product_id:
                items.append({"qty": item.quantity, "product_id": item.product_id})
            elif item.package_id:
                items.append({"qty": item.quantity, "package_id": item.package_id})
        return items

    def place_order(self, command: PlaceOrderCommand) -> PlacedOrderDTO:
        self.cart.load_cart()
        items = self._order_items()
        if not items:
            raise EmptyCartError("Your cart is empty")
        self.logger.info(
            "Placing order",
            items=len(items),
            payment_method=command.payment_method,
            fee_location=command.fee_location,
        )
        response = self.orders.create_order(command.to_body(items))
        order = OrderMapper.from_raw(response) if response.get("id") is not None else None
        if not self.cart.clear():
            self.logger.warning("Cart could not be cleared after order", order_id=order and order.id)
        self.logger.info("Order placed", order_id=order and order.id)
        return PlacedOrderDTO(
            order=order,
            payment_url=response.get("payment_url") or None,
            message=response.get("message") or None,
        )
