import unittest

from apps.orders.commands import PlaceOrderCommand
from apps.orders.container import build_checkout_service, build_order_service
from apps.orders.services import EmptyCartError
from apps.remote.exceptions import RemoteAPIError
from apps.remote.tests.fakes import FakeResponse, ResponseSequence, make_session

CART = {
    "items": [
        {"id": 1, "product_id": 3, "quantity": 2, "product": {"id": 3, "name": "Pen", "price": "1.50"}},
        {"id": 2, "package_id": 8, "quantity": 1, "package": {"id": 8, "name": "Kit", "price": 10}},
    ]
}
FEES = [
    {"id": 1, "location": "Amman", "fee": "2.00", "is_active": True},
    {"id": 2, "location": "Irbid", "fee": "4.00", "is_active": False},
]


def make_command(**overrides):
    payload = {
        "customer_name": "Sara",
        "customer_email": "sara@example.com",
        "customer_phone": "0790000000",
        "delivery_location": "Street 1, Amman, 11118",
        "payment_method": "cash_on_delivery",
        "fee_location": "Amman",
    }
    payload.update(overrides)
    return PlaceOrderCommand.from_raw(payload)


class CheckoutServiceTests(unittest.TestCase):
    def make_service(self, routes):
        session, http = make_session(routes, token="tok")
        return build_checkout_service(session), http

    def test_summary_adds_service_and_location_fees(self):
        service, _ = self.make_service(
            {
                ("GET", "/cart"): CART,
                ("GET", "/service-fee"): {"fee": "1.00"},
                ("GET", "/delivery-fees"): FEES,
            }
        )
        summary = service.summary("Amman")
        self.assertEqual(summary.subtotal, 13.0)
        self.assertEqual(summary.service_fee, 1.0)
        self.assertEqual(summary.location_fee, 2.0)
        self.assertEqual(summary.total, 16.0)
        self.assertEqual(summary.item_count, 2)

    def test_inactive_or_unknown_city_has_no_location_fee(self):
        service, _ = self.make_service({("GET", "/delivery-fees"): FEES})
        self.assertEqual(service.location_fee("Irbid"), 0.0)
        self.assertEqual(service.location_fee("Aqaba"), 0.0)
        self.assertEqual(service.location_fee(None), 0.0)

    def test_place_order_posts_cart_lines_and_clears_cart(self):
        service, http = self.make_service(
            {
                ("GET", "/cart"): ResponseSequence([CART, {"items": []}]),
                ("POST", "/orders"): FakeResponse(201, {"data": {"id": 40, "status": "pending"}, "payment_url": "https://pay/40"}),
                ("DELETE", "/cart"): FakeResponse(204),
            }
        )
        placed = service.place_order(make_command())
        body = http.calls_to("POST", "/orders")[0]["json"]
        self.assertEqual(body["items"], [{"qty": 2, "product_id": "3"}, {"qty": 1, "package_id": "8"}])
        self.assertEqual(body["fee_location"], "Amman")
        self.assertEqual(placed.order.id, "40")
        self.assertEqual(placed.payment_url, "https://pay/40")
        self.assertEqual(len(http.calls_to("DELETE", "/cart")), 1)
        self.assertEqual(service.cart.state.items, [])

    def test_empty_cart_is_rejected_before_posting(self):
        service, http = self.make_service({("GET", "/cart"): {"items": []}})
        with self.assertRaises(EmptyCartError):
            service.place_order(make_command())
        self.assertEqual(http.calls_to("POST", "/orders"), [])

    def test_backend_rejection_keeps_cart(self):
        service, http = self.make_service(
            {
                ("GET", "/cart"): CART,
                ("POST", "/orders"): FakeResponse(422, {"message": "Invalid phone"}),
            }
        )
        with self.assertRaises(RemoteAPIError):
            service.place_order(make_command())
        self.assertEqual(http.calls_to("DELETE", "/cart"), [])

    def test_failed_cart_clear_does_not_fail_the_order(self):
        service, _ = self.make_service(
            {
                ("GET", "/cart"): CART,
                ("POST", "/orders"): {"id": 41},
                ("DELETE", "/cart"): FakeResponse(500, {"message": "boom"}),
            }
        )
        placed = service.place_order(make_command())
        self.assertEqual(placed.order.id, "41")
        self.assertIsNone(placed.payment_url)


class OrderServiceTests(unittest.TestCase):
    def test_list_and_get(self):
        session, _ = make_session(
            {
                ("GET", "/orders"): {"data": [{"id": 1}, {"id": 2}]},
                ("GET", "/orders/2"): {"data": {"id": 2, "status": "shipped"}},
            },
            token="tok",
        )
        service = build_order_service(session)
        self.assertEqual([o.id for o in service.list_orders()], ["1", "2"])
        self.assertEqual(service.get_order("2").status, "shipped")
        self.assertIsNone(service.get_order("3"))
