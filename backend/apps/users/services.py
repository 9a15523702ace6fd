from __future__ import annotations

from typing import Any, Dict, Optional

from apps.common import get_logger
from .protocols import ProfileRepositoryProtocol
from .storage import UserStorage

logger = get_logger(__name__).bind(component="users", layer="service")

PROFILE_FIELDS = ("name", "email", "bio", "phone", "location", "is_private")


class ProfileService:
    def __init__(self, repository: ProfileRepositoryProtocol, users: UserStorage):
        self.repository = repository
        self.users = users
        self.logger = logger.bind(service="ProfileService")

    def fetch_profile(self) -> Dict[str, Any]:
        self.logger.debug("Fetching profile")
        return self.repository.fetch_profile()

    def update_profile(self, **fields) -> Dict[str, Any]:
        body = {k: fields[k] for k in PROFILE_FIELDS if fields.get(k) is not None}
        self.logger.info("Updating profile", fields=sorted(body))
        response = self.repository.update_profile(body)
        self.users.update_user(**body)
        return response

    def update_avatar_url(self, avatar_url: str) -> None:
        self.logger.info("Updating avatar")
        self.repository.update_avatar_url(avatar_url)
        self.users.update_user(avatar_url=avatar_url)

    def change_password(self, current_password: str, new_password: str) -> None:
        self.logger.info("Changing password")
        self.repository.change_password(current_password, new_password)

    def fetch_public_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        profile = self.repository.fetch_public_profile(user_id)
        if profile is None:
            self.logger.info("Public profile not found", user_id=user_id)
        return profile
