from __future__ import annotations

from typing import Iterable, Optional

from django.conf import settings
from django.utils import translation
from django.utils.translation import gettext_lazy as _

_DEFAULT_LANGUAGE = (
    (getattr(settings, "LANGUAGE_CODE", "ar") or "ar").split("-")[0].lower()
)
_SUPPORTED_LANGUAGES = {
    (code or "ar").split("-")[0].lower()
    for code, _ in getattr(settings, "LANGUAGES", [("ar", "Arabic"), ("en", "English")])
} or {_DEFAULT_LANGUAGE}

LANGUAGE_STORAGE_KEY = "language"


def normalize_language_code(language_code: Optional[str]) -> str:
    """
    Normalize a language code to lowercase without region (~ RFC 5646 style).
    Unknown languages fall back to the project default.
    """

    if not language_code:
        return _DEFAULT_LANGUAGE
    normalized = language_code.split(",")[0].split(";")[0].strip()
    normalized = normalized.split("-")[0].split("_")[0].lower()
    return normalized if normalized in _SUPPORTED_LANGUAGES else _DEFAULT_LANGUAGE


def resolve_language(request=None, storage=None, fallback: Optional[str] = None) -> str:
    """
    Resolve the language forwarded to the store backend as Accept-Language.

    Order: explicit ``?lang=``/``?language=`` query, the request's
    Accept-Language header, the session's stored preference, then the default.
    """

    language_code = None
    if request is not None:
        query = getattr(request, "GET", None)
        if query:
            language_code = query.get("lang") or query.get("language")
        if not language_code:
            meta = getattr(request, "META", None) or {}
            header = meta.get("HTTP_ACCEPT_LANGUAGE")
            if header and is_supported_language(header.split(",")[0].strip()):
                language_code = header
    if not language_code and storage is not None:
        language_code = storage.get_string(LANGUAGE_STORAGE_KEY)
    language_code = language_code or fallback or translation.get_language()
    return normalize_language_code(language_code)


def is_supported_language(language_code: Optional[str]) -> bool:
    if not language_code:
        return False
    normalized = language_code.split("-")[0].split("_")[0].lower()
    return normalized in _SUPPORTED_LANGUAGES


def is_default_language(language_code: Optional[str]) -> bool:
    return normalize_language_code(language_code) == _DEFAULT_LANGUAGE


def iter_supported_languages() -> Iterable[str]:
    return sorted(_SUPPORTED_LANGUAGES)


def get_default_language() -> str:
    return _DEFAULT_LANGUAGE


# Central catalogue of user-visible error messages so makemessages can extract them
# even when they are only used dynamically via error_response.
TRANSLATABLE_ERROR_MESSAGES = (
    _("Product not found"),
    _("Package not found"),
    _("Order not found"),
    _("User not found"),
    _("Authentication required"),
    _("Invalid input"),
    _("Your cart is empty"),
    _("Your account has been blocked"),
    _("Store backend is unavailable"),
    _("Store backend rejected the request"),
    _("Unsupported language"),
    _("Something went wrong"),
)


__all__ = [
    "LANGUAGE_STORAGE_KEY",
    "normalize_language_code",
    "resolve_language",
    "is_supported_language",
    "is_default_language",
    "iter_supported_languages",
    "get_default_language",
]
