from __future__ import annotations

from typing import List, Optional

from apps.common import get_logger
from apps.remote.exceptions import RemoteAPIError
from .dtos import ChatMessageDTO, ChatUserDTO, ConversationDTO
from .mappers import ChatMessageMapper, ChatUserMapper, ConversationMapper
from .protocols import ChatRepositoryProtocol

logger = get_logger(__name__).bind(component="chat", layer="service")


class ChatService:
    """Polling chat between customers and store admins."""

    def __init__(self, repository: ChatRepositoryProtocol):
        self.repository = repository
        self.logger = logger.bind(service="ChatService")

    def list_conversations(self) -> List[ConversationDTO]:
        return ConversationMapper.many_from_raw(self.repository.fetch_conversations())

    def list_admins(self) -> List[ChatUserDTO]:
        return ChatUserMapper.many_from_raw(self.repository.fetch_admins())

    def list_messages(self, other_user_id: str, mark_read: bool = True) -> List[ChatMessageDTO]:
        messages = ChatMessageMapper.many_from_raw(self.repository.fetch_messages(other_user_id))
        if mark_read:
            self.mark_read(other_user_id)
        return messages

    def send_message(
        self, to_user_id: str, message: str, image_url: Optional[str] = None
    ) -> Optional[ChatMessageDTO]:
        self.logger.info("Sending chat message", to_user_id=to_user_id, has_image=bool(image_url))
        response = self.repository.send_message(to_user_id, message, image_url)
        payload = response.get("data") if isinstance(response.get("data"), dict) else response
        if not payload:
            return None
        return ChatMessageMapper.from_raw(payload)

    def mark_read(self, other_user_id: str) -> bool:
        try:
            self.repository.mark_read(other_user_id)
        except RemoteAPIError as exc:
            self.logger.info("Marking conversation read failed", other_user_id=other_user_id, error=str(exc))
            return False
        return True

    def delete_message(self, message_id: str) -> None:
        self.logger.info("Deleting chat message", message_id=message_id)
        self.repository.delete_message(message_id)
