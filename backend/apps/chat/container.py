from __future__ import annotations

from apps.remote.session import StorefrontSession
from .repositories import RemoteChatRepository
from .services import ChatService


def build_chat_service(session: StorefrontSession) -> ChatService:
    return ChatService(repository=RemoteChatRepository(session.client))
