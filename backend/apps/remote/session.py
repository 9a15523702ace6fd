from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import requests

from apps.common import get_logger
from apps.common.i18n import normalize_language_code
from apps.common.storage import KeyValueStorage
from .client import ApiClient
from .config import HttpConfig, generate_guest_id

logger = get_logger(__name__).bind(component="remote", layer="session")


@dataclass
class StorefrontSession:
    """Everything one storefront session needs: identity, local storage and a backend client."""

    guest_id: str
    storage: KeyValueStorage
    config: HttpConfig
    client: ApiClient

    @property
    def is_authenticated(self) -> bool:
        return self.config.is_authenticated


def build_session(
    guest_id: Optional[str] = None,
    *,
    token: Optional[str] = None,
    language: Optional[str] = None,
    base_url: Optional[str] = None,
    csrf_token: Optional[str] = None,
    http_session: Optional[requests.Session] = None,
    storage: Optional[KeyValueStorage] = None,
) -> StorefrontSession:
    resolved_guest_id = guest_id or generate_guest_id()
    storage = storage or KeyValueStorage(resolved_guest_id)
    config = HttpConfig(guest_id=resolved_guest_id, auth_token=token or None)
    config.initialize(storage, base_url=base_url, csrf_token=csrf_token)
    if language:
        config.language = normalize_language_code(language)
    logger.debug(
        "Storefront session built",
        guest_id=resolved_guest_id,
        authenticated=config.is_authenticated,
        language=config.language,
    )
    return StorefrontSession(
        guest_id=resolved_guest_id,
        storage=storage,
        config=config,
        client=ApiClient(config, session=http_session),
    )
