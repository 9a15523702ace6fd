import unittest
from unittest.mock import Mock, patch

from django.utils import timezone
from rest_framework.test import APIRequestFactory

from apps.orders.dtos import CheckoutSummaryDTO, DeliveryFeeDTO, OrderDTO, PlacedOrderDTO
from apps.orders.services import EmptyCartError
from apps.orders.views import (
    CheckoutSummaryView,
    DeliveryFeeListView,
    OrderDetailView,
    OrderListView,
    ServiceFeeView,
)
from apps.remote.tests.fakes import make_session

ORDER_PAYLOAD = {
    "customer_name": "Sara",
    "customer_email": "sara@example.com",
    "customer_phone": "0790000000",
    "delivery_location": "Street 1, Amman",
    "payment_method": "cash_on_delivery",
}


def make_order(order_id="1"):
    return OrderDTO(id=order_id, created_at=timezone.now(), status="pending", total_price=5.0)


class OrderViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.service = Mock()
        self.checkout = Mock()

    def dispatch(self, request, view_cls, token="tok", **kwargs):
        request.storefront, _ = make_session(token=token)
        patches = [patch.object(view_cls, "checkout_factory", Mock(return_value=self.checkout), create=True)]
        if hasattr(view_cls, "service_factory"):
            patches.append(patch.object(view_cls, "service_factory", Mock(return_value=self.service)))
        for p in patches:
            p.start()
        try:
            return view_cls.as_view()(request, **kwargs)
        finally:
            for p in patches:
                p.stop()

    def test_order_history_requires_login(self):
        response = self.dispatch(self.factory.get("/api/orders/"), OrderListView, token=None)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"]["code"], "UNAUTHORIZED")
        self.service.list_orders.assert_not_called()

    def test_list_orders(self):
        self.service.list_orders.return_value = [make_order()]
        response = self.dispatch(self.factory.get("/api/orders/"), OrderListView)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data[0]["total_price_display"], "5.00 JD")

    def test_guest_can_place_order(self):
        self.checkout.place_order.return_value = PlacedOrderDTO(order=make_order("9"), payment_url="https://pay/9")
        request = self.factory.post("/api/orders/", ORDER_PAYLOAD, format="json")
        response = self.dispatch(request, OrderListView, token=None)
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["order"]["id"], "9")
        self.assertEqual(response.data["payment_url"], "https://pay/9")
        command = self.checkout.place_order.call_args[0][0]
        self.assertIsNone(command.card_details)

    def test_credit_card_requires_card_details(self):
        payload = dict(ORDER_PAYLOAD, payment_method="credit_card")
        response = self.dispatch(self.factory.post("/api/orders/", payload, format="json"), OrderListView)
        self.assertEqual(response.status_code, 400)
        self.checkout.place_order.assert_not_called()

    def test_empty_cart_is_a_validation_error(self):
        self.checkout.place_order.side_effect = EmptyCartError("Your cart is empty")
        response = self.dispatch(self.factory.post("/api/orders/", ORDER_PAYLOAD, format="json"), OrderListView)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["message"], "Your cart is empty")

    def test_missing_order_is_404(self):
        self.service.get_order.return_value = None
        response = self.dispatch(self.factory.get("/api/orders/3/"), OrderDetailView, order_id="3")
        self.assertEqual(response.status_code, 404)

    def test_delete_order(self):
        response = self.dispatch(self.factory.delete("/api/orders/3/"), OrderDetailView, order_id="3")
        self.assertEqual(response.status_code, 204)
        self.service.delete_order.assert_called_once_with("3")

    def test_checkout_summary(self):
        self.checkout.summary.return_value = CheckoutSummaryDTO(
            subtotal=10, service_fee=1, location_fee=2, total=13, fee_location="Amman", item_count=2
        )
        request = self.factory.get("/api/checkout/summary/", {"fee_location": "Amman"})
        response = self.dispatch(request, CheckoutSummaryView, token=None)
        self.assertEqual(response.data["total_display"], "13.00 JD")
        self.checkout.summary.assert_called_once_with("Amman")

    def test_fee_endpoints(self):
        self.checkout.delivery_fees.return_value = [DeliveryFeeDTO(id="1", location="Amman", fee=2.0)]
        self.checkout.service_fee.return_value = 1.5
        fees = self.dispatch(self.factory.get("/api/fees/delivery/"), DeliveryFeeListView, token=None)
        service = self.dispatch(self.factory.get("/api/fees/service/"), ServiceFeeView, token=None)
        self.assertEqual(fees.data[0]["fee_display"], "2.00 JD")
        self.assertEqual(service.data, {"fee": 1.5, "fee_display": "1.50 JD"})
