import logging

import pytest
from django.test import RequestFactory

from apps.common.coerce import optional_str, parse_bool, parse_int
from apps.common.currency import format_price, parse_price
from apps.common.i18n import (
    is_supported_language,
    normalize_language_code,
    resolve_language,
)
from apps.common.logger import get_logger
from apps.remote.tests.fakes import make_storage


@pytest.mark.parametrize(
    "value, expected",
    [("12.5", 12.5), (3, 3.0), (None, 0.0), ("abc", 0.0), (True, 0.0), ("nan", 0.0)],
)
def test_parse_price(value, expected):
    assert parse_price(value) == expected


def test_price_formatting():
    assert format_price("12.5") == "12.50 JD"
    assert format_price(7, show_symbol=False) == "7.00"


def test_coercions():
    assert parse_int("42") == 42
    assert parse_int(4.9) == 4
    assert parse_int("x", default=0) == 0
    assert parse_int(True) is None
    assert parse_bool("yes") is True
    assert parse_bool(0) is False
    assert parse_bool("maybe") is None
    assert optional_str(5) == "5"
    assert optional_str(None) is None


@pytest.mark.parametrize(
    "code, expected",
    [("en", "en"), ("EN-us", "en"), ("ar;q=0.9", "ar"), ("de", "ar"), (None, "ar")],
)
def test_normalize_language_code(code, expected):
    assert normalize_language_code(code) == expected


def test_resolve_language_prefers_query_then_header_then_storage():
    factory = RequestFactory()
    storage = make_storage("lang-resolve")
    storage.set_string("language", "en")

    assert resolve_language(factory.get("/api/products/?lang=ar", HTTP_ACCEPT_LANGUAGE="en"), storage) == "ar"
    assert resolve_language(factory.get("/api/products/", HTTP_ACCEPT_LANGUAGE="ar"), storage) == "ar"
    assert resolve_language(factory.get("/api/products/", HTTP_ACCEPT_LANGUAGE="fr"), storage) == "en"
    assert not is_supported_language("fr")


def test_logger_masks_sensitive_values(caplog):
    log = get_logger("apps.tests.logger").bind(component="tests")
    with caplog.at_level(logging.INFO, logger="apps.tests.logger"):
        log.info("Signed in", token="secret", email="a@b.c")
    assert "secret" not in caplog.text
    assert "token=***" in caplog.text
    assert "component=tests" in caplog.text
    assert "email=a@b.c" in caplog.text
