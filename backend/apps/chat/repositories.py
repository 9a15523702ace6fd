from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from apps.common.repository import RemoteRepository
from apps.remote.shapes import extract_list, mappings_only


class RemoteChatRepository(RemoteRepository):
    def _list(self, path: str) -> List[Dict[str, Any]]:
        return mappings_only(extract_list(self.client.get_json(path)))

    def fetch_conversations(self) -> List[Dict[str, Any]]:
        return self._list("/conversations")

    def fetch_messages(self, other_user_id: str) -> List[Dict[str, Any]]:
        return self._list(f"/messages/{other_user_id}")

    def fetch_admins(self) -> List[Dict[str, Any]]:
        return self._list("/admins")

    def send_message(
        self, to_user_id: str, message: str, image_url: Optional[str] = None
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"to_user_id": to_user_id, "message": message}
        if image_url is not None and image_url.strip():
            body["image_url"] = image_url
        response = self.client.post_json("/messages", body=body)
        return dict(response) if isinstance(response, Mapping) else {}

    def mark_read(self, other_user_id: str) -> None:
        self.client.post_json(f"/chat/{other_user_id}/read")

    def delete_message(self, message_id: str) -> None:
        self.client.delete_json(f"/messages/{message_id}")
