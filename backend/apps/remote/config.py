from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from django.conf import settings

from apps.common import get_logger
from apps.common.i18n import LANGUAGE_STORAGE_KEY, normalize_language_code

logger = get_logger(__name__).bind(component="remote", layer="config")

TOKEN_STORAGE_KEY = "token"
GUEST_ID_STORAGE_KEY = "guest_id"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 10; K) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119.0.0.0 Mobile Safari/537.36"
)


def generate_guest_id() -> str:
    return f"guest_{int(time.time() * 1000)}_{secrets.token_hex(8)}"


def default_base_url() -> str:
    return getattr(settings, "API_BASE_URL", "https://makateb.metafortech.com/api")


@dataclass
class HttpConfig:
    """Per-session HTTP defaults for calls to the store backend."""

    base_url: Optional[str] = None
    language: str = "ar"
    auth_token: Optional[str] = None
    csrf_token: Optional[str] = None
    guest_id: Optional[str] = None
    user_agent: str = field(
        default_factory=lambda: getattr(settings, "REMOTE_USER_AGENT", DEFAULT_USER_AGENT)
    )
    storage: Optional[object] = field(default=None, repr=False, compare=False)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_token)

    def initialize(
        self,
        storage=None,
        *,
        base_url: Optional[str] = None,
        csrf_token: Optional[str] = None,
    ) -> "HttpConfig":
        """Restore language, token and guest id from storage; persist a fresh guest id."""
        self.base_url = base_url or self.base_url or default_base_url()
        self.csrf_token = csrf_token
        if storage is not None:
            self.storage = storage
        if self.storage is None:
            return self
        self.language = normalize_language_code(
            self.storage.get_string(LANGUAGE_STORAGE_KEY) or self.language
        )
        self.auth_token = self.auth_token or self.storage.get_string(TOKEN_STORAGE_KEY)
        self.guest_id = self.guest_id or self.storage.get_string(GUEST_ID_STORAGE_KEY)
        if self.guest_id is None:
            self.guest_id = generate_guest_id()
            self.storage.set_string(GUEST_ID_STORAGE_KEY, self.guest_id)
            logger.debug("Generated guest id", guest_id=self.guest_id)
        return self

    def set_auth_token(self, token: Optional[str]) -> None:
        self.auth_token = token
        if self.storage is None:
            return
        if token is not None:
            self.storage.set_string(TOKEN_STORAGE_KEY, token)
        else:
            self.storage.remove(TOKEN_STORAGE_KEY)

    def set_language(self, language: str) -> None:
        self.language = normalize_language_code(language)
        if self.storage is not None:
            self.storage.set_string(LANGUAGE_STORAGE_KEY, self.language)

    @property
    def default_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Accept-Language": self.language,
            "User-Agent": self.user_agent,
        }
        if self.csrf_token:
            headers["X-CSRF-TOKEN"] = self.csrf_token
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        if self.guest_id is None:
            self.guest_id = generate_guest_id()
            if self.storage is not None:
                self.storage.set_string(GUEST_ID_STORAGE_KEY, self.guest_id)
            logger.warning("Generated fallback guest id", guest_id=self.guest_id)
        headers["X-Guest-Id"] = self.guest_id
        return headers
