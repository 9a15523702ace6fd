from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol


class ChatRepositoryProtocol(Protocol):
    def fetch_conversations(self) -> List[Dict[str, Any]]:
        ...

    def fetch_messages(self, other_user_id: str) -> List[Dict[str, Any]]:
        ...

    def fetch_admins(self) -> List[Dict[str, Any]]:
        ...

    def send_message(
        self, to_user_id: str, message: str, image_url: Optional[str] = None
    ) -> Dict[str, Any]:
        ...

    def mark_read(self, other_user_id: str) -> None:
        ...

    def delete_message(self, message_id: str) -> None:
        ...
