import unittest

from apps.remote.exceptions import RemoteAPIError
from apps.remote.tests.fakes import FakeResponse, make_session
from apps.users.container import build_profile_service
from apps.users.dtos import AppUserDTO
from apps.users.storage import UserStorage


class ProfileServiceTests(unittest.TestCase):
    def make_service(self, routes):
        session, http = make_session(routes, token="tok")
        users = UserStorage(session.storage)
        users.save_user(AppUserDTO(id="1", name="Lina", email="lina@example.com"))
        return build_profile_service(session), http, users

    def test_fetch_profile_non_mapping_is_empty(self):
        service, _, _ = self.make_service({("GET", "/profile"): ["odd"]})
        self.assertEqual(service.fetch_profile(), {})

    def test_update_profile_sends_only_provided_fields(self):
        service, http, users = self.make_service({("PUT", "/profile"): {"id": 1, "name": "Lina K"}})
        result = service.update_profile(name="Lina K", bio=None, is_private=False)
        self.assertEqual(http.calls_to("PUT", "/profile")[0]["json"], {"name": "Lina K", "is_private": False})
        self.assertEqual(result["name"], "Lina K")
        stored = users.get_user()
        self.assertEqual(stored.name, "Lina K")
        self.assertEqual(stored.additional_data, {"is_private": False})

    def test_failed_update_leaves_stored_user(self):
        service, _, users = self.make_service(
            {("PUT", "/profile"): FakeResponse(422, {"message": "Email taken", "errors": {"email": ["taken"]}})}
        )
        with self.assertRaises(RemoteAPIError):
            service.update_profile(email="taken@example.com")
        self.assertEqual(users.get_user().email, "lina@example.com")

    def test_avatar_and_password(self):
        service, http, users = self.make_service(
            {
                ("POST", "/profile/avatar"): {"message": "ok"},
                ("POST", "/profile/change-password"): {"message": "ok"},
            }
        )
        service.update_avatar_url("https://cdn/new.png")
        service.change_password("old-secret", "new-secret")
        self.assertEqual(users.get_user().profile_value("avatar_url"), "https://cdn/new.png")
        self.assertEqual(
            http.calls_to("POST", "/profile/change-password")[0]["json"],
            {"current_password": "old-secret", "password": "new-secret", "password_confirmation": "new-secret"},
        )

    def test_public_profile_falls_back_to_admin_lookup(self):
        service, http, _ = self.make_service({("GET", "/admin/users/5"): {"id": 5, "name": "Support"}})
        self.assertEqual(service.fetch_public_profile("5")["name"], "Support")
        self.assertEqual(len(http.calls_to("GET", "/users/5/profile")), 1)

    def test_public_profile_missing(self):
        service, _, _ = self.make_service({})
        self.assertIsNone(service.fetch_public_profile("9"))
