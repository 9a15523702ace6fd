import unittest

from apps.orders.repositories import RemoteFeeRepository, RemoteOrderRepository
from apps.remote.exceptions import RemoteAPIError
from apps.remote.tests.fakes import FakeResponse, make_session


def make_repos(routes):
    session, http = make_session(routes, token="tok")
    return RemoteOrderRepository(session.client), RemoteFeeRepository(session.client), http


class RemoteOrderRepositoryTests(unittest.TestCase):
    def test_fetch_orders_accepts_wrapped_and_bare_lists(self):
        orders, _, _ = make_repos({("GET", "/orders"): {"data": [{"id": 1}, "x"]}})
        self.assertEqual(orders.fetch_orders(), [{"id": 1}])
        orders, _, _ = make_repos({("GET", "/orders"): [{"id": 2}]})
        self.assertEqual(orders.fetch_orders(), [{"id": 2}])

    def test_fetch_orders_swallows_errors(self):
        orders, _, _ = make_repos({("GET", "/orders"): FakeResponse(500, {"message": "down"})})
        self.assertEqual(orders.fetch_orders(), [])

    def test_fetch_order_unwraps_data(self):
        orders, _, _ = make_repos({("GET", "/orders/5"): {"data": {"id": 5}}})
        self.assertEqual(orders.fetch_order("5"), {"id": 5})

    def test_missing_order_is_none(self):
        orders, _, _ = make_repos({})
        self.assertIsNone(orders.fetch_order("404"))

    def test_create_order_keeps_payment_url(self):
        orders, _, http = make_repos(
            {
                ("POST", "/orders"): FakeResponse(
                    201,
                    {"message": "Created", "payment_url": "https://pay/1", "data": {"id": 9}},
                )
            }
        )
        created = orders.create_order({"items": [{"qty": 1, "product_id": "3"}]})
        self.assertEqual(created["id"], 9)
        self.assertEqual(created["payment_url"], "https://pay/1")
        self.assertEqual(http.calls_to("POST", "/orders")[0]["json"]["items"][0]["qty"], 1)

    def test_create_order_raises_backend_errors(self):
        orders, _, _ = make_repos(
            {("POST", "/orders"): FakeResponse(422, {"message": "Invalid", "errors": {"customer_email": ["bad"]}})}
        )
        with self.assertRaises(RemoteAPIError) as ctx:
            orders.create_order({"items": []})
        self.assertEqual(ctx.exception.errors, {"customer_email": ["bad"]})


class RemoteFeeRepositoryTests(unittest.TestCase):
    def test_delivery_fees_list_or_empty(self):
        _, fees, _ = make_repos({("GET", "/delivery-fees"): [{"id": 1, "location": "Amman"}]})
        self.assertEqual(fees.fetch_delivery_fees(), [{"id": 1, "location": "Amman"}])
        _, fees, _ = make_repos({("GET", "/delivery-fees"): {"data": []}})
        self.assertEqual(fees.fetch_delivery_fees(), [])

    def test_service_fee_mapping_or_empty(self):
        _, fees, _ = make_repos({("GET", "/service-fee"): {"fee": "1.25"}})
        self.assertEqual(fees.fetch_service_fee(), {"fee": "1.25"})
        _, fees, _ = make_repos({("GET", "/service-fee"): FakeResponse(503, {"message": "x"})})
        self.assertEqual(fees.fetch_service_fee(), {})
