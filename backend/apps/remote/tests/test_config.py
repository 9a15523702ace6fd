import pytest
from django.test import override_settings

from apps.remote.config import (
    GUEST_ID_STORAGE_KEY,
    TOKEN_STORAGE_KEY,
    HttpConfig,
    generate_guest_id,
)
from apps.remote.tests.fakes import make_storage


def test_generated_guest_ids_have_expected_shape():
    guest_id = generate_guest_id()
    prefix, millis, suffix = guest_id.split("_")
    assert prefix == "guest"
    assert millis.isdigit()
    assert len(suffix) == 16
    assert generate_guest_id() != guest_id


@override_settings(API_BASE_URL="https://backend.test/api")
def test_initialize_restores_from_storage():
    storage = make_storage("config-restore")
    storage.set_string(TOKEN_STORAGE_KEY, "stored-token")
    storage.set_string("language", "en")
    config = HttpConfig().initialize(storage)
    assert config.base_url == "https://backend.test/api"
    assert config.auth_token == "stored-token"
    assert config.language == "en"
    assert storage.get_string(GUEST_ID_STORAGE_KEY) == config.guest_id


def test_header_token_wins_over_stored_token():
    storage = make_storage("config-header")
    storage.set_string(TOKEN_STORAGE_KEY, "stored-token")
    config = HttpConfig(auth_token="header-token").initialize(storage)
    assert config.auth_token == "header-token"


def test_set_auth_token_persists_and_clears():
    storage = make_storage("config-token")
    config = HttpConfig(guest_id="g1").initialize(storage)
    config.set_auth_token("tok")
    assert storage.get_string(TOKEN_STORAGE_KEY) == "tok"
    assert config.default_headers["Authorization"] == "Bearer tok"
    config.set_auth_token(None)
    assert storage.get_string(TOKEN_STORAGE_KEY) is None
    assert "Authorization" not in config.default_headers


@pytest.mark.parametrize("requested, expected", [("en", "en"), ("ar-JO", "ar"), ("fr", "ar")])
def test_set_language_normalizes(requested, expected):
    storage = make_storage("config-lang")
    config = HttpConfig(guest_id="g1").initialize(storage)
    config.set_language(requested)
    assert config.language == expected
    assert storage.get_string("language") == expected


def test_csrf_header_only_when_present():
    config = HttpConfig(guest_id="g1", csrf_token="csrf-1")
    assert config.default_headers["X-CSRF-TOKEN"] == "csrf-1"
    assert "X-CSRF-TOKEN" not in HttpConfig(guest_id="g1").default_headers


def test_missing_guest_id_is_generated_for_headers():
    config = HttpConfig()
    headers = config.default_headers
    assert headers["X-Guest-Id"].startswith("guest_")
    assert config.guest_id == headers["X-Guest-Id"]
