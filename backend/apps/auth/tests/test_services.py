import unittest

from apps.auth.container import build_auth_service
from apps.auth.services import UserBlockedError
from apps.guests.dtos import GuestCartItem
from apps.guests.storage import GuestStorage
from apps.remote.exceptions import RemoteAPIError, UnexpectedResponseError
from apps.remote.tests.fakes import FakeResponse, ResponseSequence, make_session
from apps.users.dtos import AppUserDTO
from apps.users.storage import UserStorage

USER = {"id": 4, "name": "Lina", "email": "lina@example.com", "role": "customer"}
LOGIN_OK = {"access_token": "tok-1", "user": USER}


def make_service(routes, token=None):
    session, http = make_session(routes, token=token)
    return build_auth_service(session), http, session


class LoginTests(unittest.TestCase):
    def test_login_merges_guest_cart_and_wishlist(self):
        service, http, session = make_service(
            {
                ("GET", "/cart"): {"items": [{"id": 1, "product_id": 3, "quantity": 2}]},
                ("GET", "/wishlist"): {"items": [{"id": 5, "package_id": 8}]},
                ("POST", "/login"): LOGIN_OK,
                ("POST", "/cart/sync-guest"): {"message": "Synced"},
                ("POST", "/wishlist/sync-guest"): {"message": "Synced"},
            }
        )
        GuestStorage(session.storage).add_to_cart(GuestCartItem(id="", product_id="9", quantity=1))

        result = service.login({"email": "lina@example.com", "password": "secret123"})

        self.assertEqual(result.token, "tok-1")
        self.assertTrue(result.cart_synced)
        self.assertTrue(result.wishlist_synced)
        first_cart_read = http.calls_to("GET", "/cart")[0]
        self.assertNotIn("Authorization", first_cart_read["headers"])
        sync = http.calls_to("POST", "/cart/sync-guest")[0]
        self.assertEqual(sync["headers"]["Authorization"], "Bearer tok-1")
        synced_products = sorted(i["product_id"] for i in sync["json"]["items"])
        self.assertEqual(synced_products, ["3", "9"])
        self.assertEqual(
            http.calls_to("POST", "/wishlist/sync-guest")[0]["json"]["items"],
            [{"product_id": None, "package_id": "8"}],
        )
        self.assertEqual(GuestStorage(session.storage).get_cart(), [])
        self.assertEqual(session.storage.get_string("token"), "tok-1")
        self.assertEqual(service.current_user.name, "Lina")

    def test_sync_failure_does_not_fail_login(self):
        service, _, session = make_service(
            {
                ("GET", "/cart"): {"items": [{"id": 1, "product_id": 3, "quantity": 1}]},
                ("POST", "/login"): LOGIN_OK,
                ("POST", "/cart/sync-guest"): FakeResponse(500, {"message": "boom"}),
            }
        )
        result = service.login({"email": "lina@example.com", "password": "secret123"})
        self.assertFalse(result.cart_synced)
        self.assertTrue(session.is_authenticated)

    def test_rejected_credentials_keep_guest_session(self):
        service, _, session = make_service(
            {("POST", "/login"): FakeResponse(401, {"message": "Invalid credentials"})}
        )
        with self.assertRaises(RemoteAPIError) as ctx:
            service.login({"email": "lina@example.com", "password": "wrong"})
        self.assertTrue(ctx.exception.is_unauthorized)
        self.assertFalse(session.is_authenticated)

    def test_login_response_without_token_is_rejected(self):
        service, _, session = make_service({("POST", "/login"): {"user": USER}})
        with self.assertRaises(UnexpectedResponseError):
            service.login({"email": "lina@example.com", "password": "secret123"})
        self.assertIsNone(session.storage.get_string("token"))


class RegisterTests(unittest.TestCase):
    def test_retries_with_customer_role_when_backend_requires_it(self):
        service, http, _ = make_service(
            {
                ("POST", "/register"): ResponseSequence(
                    [
                        FakeResponse(422, {"message": "The role field is required.", "errors": {"role": ["required"]}}),
                        FakeResponse(201, {"access_token": "tok-2", "user": dict(USER, role="admin")}),
                    ]
                )
            }
        )
        result = service.register(
            {"name": " Lina ", "email": "lina@example.com", "password": "secret123", "passwordConfirmation": "secret123"}
        )
        calls = http.calls_to("POST", "/register")
        self.assertEqual(len(calls), 2)
        self.assertEqual(calls[0]["json"]["name"], "Lina")
        self.assertEqual(calls[0]["json"]["password_confirmation"], "secret123")
        self.assertNotIn("role", calls[0]["json"])
        self.assertEqual(calls[1]["json"]["role"], "customer")
        self.assertEqual(result.user.role, "customer")

    def test_other_validation_errors_are_raised(self):
        service, http, _ = make_service(
            {("POST", "/register"): FakeResponse(422, {"message": "The email has already been taken."})}
        )
        with self.assertRaises(RemoteAPIError):
            service.register({"name": "L", "email": "lina@example.com", "password": "x", "password_confirmation": "x"})
        self.assertEqual(len(http.calls_to("POST", "/register")), 1)


class SessionTests(unittest.TestCase):
    def test_logout_clears_even_when_backend_fails(self):
        service, http, session = make_service(
            {("POST", "/logout"): FakeResponse(500, {"message": "boom"})}, token="tok"
        )
        session.config.set_auth_token("tok")
        UserStorage(session.storage).save_user(AppUserDTO(id="4", name="Lina", email="lina@example.com"))
        self.assertFalse(service.logout())
        self.assertEqual(http.calls_to("POST", "/logout")[0]["headers"]["Authorization"], "Bearer tok")
        self.assertFalse(session.is_authenticated)
        self.assertIsNone(session.storage.get_string("token"))
        self.assertIsNone(service.current_user)

    def test_blocked_user_is_logged_out(self):
        service, _, session = make_service(
            {("GET", "/user"): dict(USER, is_blocked=1), ("POST", "/logout"): {"message": "ok"}},
            token="tok",
        )
        with self.assertRaises(UserBlockedError):
            service.fetch_user()
        self.assertFalse(session.is_authenticated)

    def test_expired_token_logs_out_and_reraises(self):
        service, _, session = make_service(
            {("GET", "/user"): FakeResponse(401, {"message": "Unauthenticated."})}, token="tok"
        )
        with self.assertRaises(RemoteAPIError):
            service.fetch_user()
        self.assertFalse(session.is_authenticated)

    def test_initialize_session_fetches_missing_user(self):
        service, http, _ = make_service({("GET", "/user"): USER}, token="tok")
        self.assertEqual(service.initialize_session().id, "4")
        # stored now; no second fetch
        service.initialize_session()
        self.assertEqual(len(http.calls_to("GET", "/user")), 1)

    def test_initialize_session_ignores_transient_errors(self):
        service, _, session = make_service(
            {("GET", "/user"): FakeResponse(503, {"message": "down"})}, token="tok"
        )
        self.assertIsNone(service.initialize_session())
        self.assertTrue(session.is_authenticated)

    def test_initialize_session_forbidden_logs_out(self):
        service, _, session = make_service(
            {("GET", "/user"): FakeResponse(403, {"message": "Forbidden"})}, token="tok"
        )
        self.assertIsNone(service.initialize_session())
        self.assertFalse(session.is_authenticated)

    def test_guest_session_has_no_user(self):
        service, http, _ = make_service({})
        self.assertIsNone(service.initialize_session())
        self.assertEqual(http.calls, [])
