import unittest

from apps.remote.exceptions import RemoteAPIError, RemoteUnavailableError
from apps.remote.tests.fakes import FakeResponse, connection_error, make_session


class ApiClientTests(unittest.TestCase):
    def test_default_headers_are_sent(self):
        session, http = make_session({("GET", "/products"): []}, token="tok", language="ar")
        session.client.get_json("/products")
        headers = http.calls[0]["headers"]
        self.assertEqual(headers["Accept"], "application/json")
        self.assertEqual(headers["Accept-Language"], "ar")
        self.assertEqual(headers["Authorization"], "Bearer tok")
        self.assertEqual(headers["X-Guest-Id"], "guest_test")

    def test_query_is_encoded(self):
        session, http = make_session({("GET", "/products"): []})
        session.client.get_json("products", query={"search": "دفتر A4", "page": None})
        call = http.calls[0]
        self.assertTrue(call["url"].startswith("https://store.test/api/products?"))
        self.assertIn("page=", call["query"])

    def test_body_is_json_encoded(self):
        session, http = make_session({("POST", "/cart"): {"message": "ok"}})
        self.assertEqual(session.client.post_json("/cart", body={"product_id": "3"}), {"message": "ok"})
        self.assertEqual(http.calls[0]["json"], {"product_id": "3"})

    def test_empty_body_decodes_to_none(self):
        session, _ = make_session({("DELETE", "/cart"): FakeResponse(204)})
        self.assertIsNone(session.client.delete_json("/cart"))

    def test_laravel_error_message_and_errors_are_kept(self):
        session, _ = make_session(
            {
                ("POST", "/register"): FakeResponse(
                    422, {"message": "The email has already been taken.", "errors": {"email": ["taken"]}}
                )
            }
        )
        with self.assertRaises(RemoteAPIError) as ctx:
            session.client.post_json("/register", body={})
        self.assertEqual(str(ctx.exception), "The email has already been taken.")
        self.assertEqual(ctx.exception.status_code, 422)
        self.assertEqual(ctx.exception.errors, {"email": ["taken"]})

    def test_plain_text_error_body_becomes_message(self):
        session, _ = make_session({("GET", "/user"): FakeResponse(500, text="Server Error")})
        with self.assertRaises(RemoteAPIError) as ctx:
            session.client.get_json("/user")
        self.assertEqual(str(ctx.exception), "Server Error")

    def test_error_without_body_has_generic_message(self):
        session, _ = make_session({("GET", "/user"): FakeResponse(503)})
        with self.assertRaises(RemoteAPIError) as ctx:
            session.client.get_json("/user")
        self.assertEqual(str(ctx.exception), "Request failed (503)")

    def test_transport_errors_are_wrapped(self):
        session, _ = make_session({("GET", "/products"): connection_error()})
        with self.assertRaises(RemoteUnavailableError) as ctx:
            session.client.get_json("/products")
        self.assertIsNone(ctx.exception.status_code)
        self.assertIsNotNone(ctx.exception.cause)

    def test_per_call_headers_extend_the_defaults(self):
        session, http = make_session({("GET", "/products"): []}, language="en")
        session.client.get_json("/products", headers={"Accept-Language": "ar", "X-Request-Source": "warmup"})
        headers = http.calls[0]["headers"]
        self.assertEqual(headers["Accept-Language"], "ar")
        self.assertEqual(headers["X-Request-Source"], "warmup")
        self.assertEqual(headers["X-Guest-Id"], "guest_test")
        self.assertEqual(session.config.default_headers["Accept-Language"], "en")

    def test_body_is_passed_to_requests_as_json(self):
        session, http = make_session(
            {("PUT", "/cart/4"): {"message": "Updated"}, ("DELETE", "/cart/4"): FakeResponse(204)}
        )
        session.client.put_json("/cart/4", body={"quantity": 2})
        session.client.delete_json("/cart/4")
        self.assertEqual(http.calls[0]["json"], {"quantity": 2})
        self.assertIsNone(http.calls[1]["json"])
