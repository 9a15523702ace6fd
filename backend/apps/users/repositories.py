from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from apps.common.repository import RemoteRepository
from apps.remote.exceptions import RemoteAPIError


class RemoteProfileRepository(RemoteRepository):
    resource = "profile"

    def fetch_profile(self) -> Dict[str, Any]:
        response = self.get()
        return dict(response) if isinstance(response, Mapping) else {}

    def update_profile(self, body: Dict[str, Any]) -> Dict[str, Any]:
        response = self.put(body=body)
        return dict(response) if isinstance(response, Mapping) else {}

    def update_avatar_url(self, avatar_url: str) -> None:
        self.post("avatar", body={"avatar_url": avatar_url})

    def change_password(self, current_password: str, new_password: str) -> None:
        self.post(
            "change-password",
            body={
                "current_password": current_password,
                "password": new_password,
                "password_confirmation": new_password,
            },
        )

    def fetch_public_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        for path in (f"/users/{user_id}/profile", f"/admin/users/{user_id}"):
            try:
                response = self.client.get_json(path)
            except RemoteAPIError as exc:
                self.logger.debug(
                    "Public profile lookup failed", path=path, status=exc.status_code
                )
                continue
            if isinstance(response, Mapping):
                return dict(response)
        return None
