"""Signed-in user cached in the session storage next to the token."""
from __future__ import annotations

from typing import Any, Dict, Optional

from apps.common import get_logger
from apps.common.storage import KeyValueStorage
from .dtos import AppUserDTO

logger = get_logger(__name__).bind(component="users", layer="storage")

USER_STORAGE_KEY = "auth_user"


class UserStorage:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def get_user(self) -> Optional[AppUserDTO]:
        raw = self.storage.get_json(USER_STORAGE_KEY)
        if raw is None:
            return None
        if not isinstance(raw, dict):
            logger.warning("Discarding corrupt stored user", namespace=self.storage.namespace)
            self.storage.remove(USER_STORAGE_KEY)
            return None
        return AppUserDTO.from_raw(raw)

    def save_user(self, user: Optional[AppUserDTO]) -> None:
        if user is None:
            self.storage.remove(USER_STORAGE_KEY)
        else:
            self.storage.set_json(USER_STORAGE_KEY, user.to_json())

    def update_user(
        self,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        bio: Optional[str] = None,
        phone: Optional[str] = None,
        location: Optional[str] = None,
        avatar_url: Optional[str] = None,
        is_private: Optional[bool] = None,
    ) -> Optional[AppUserDTO]:
        """Apply a local profile edit to the stored user; no-op when signed out."""
        user = self.get_user()
        if user is None:
            return None
        extra: Dict[str, Any] = dict(user.additional_data or {})
        for key, value in (
            ("bio", bio),
            ("phone", phone),
            ("location", location),
            ("avatar_url", avatar_url),
            ("is_private", is_private),
        ):
            if value is not None:
                extra[key] = value
        updated = user.copy_with(
            name=name if name is not None else user.name,
            email=email if email is not None else user.email,
            additional_data=extra or None,
        )
        self.save_user(updated)
        return updated
