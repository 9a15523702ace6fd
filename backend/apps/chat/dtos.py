from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class ChatUserDTO:
    id: str
    name: str
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Optional[str] = None
    is_online: bool = False


@dataclass
class ChatMessageDTO:
    id: str
    message: str
    user_id: Optional[str]
    timestamp: datetime
    to_user_id: Optional[str] = None
    image_url: Optional[str] = None
    is_read: bool = False
    order_id: Optional[str] = None
    sender: Optional[ChatUserDTO] = None
    message_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ConversationDTO:
    id: str
    user: ChatUserDTO
    last_message: Optional[ChatMessageDTO] = None
    unread_count: int = 0
    order_id: Optional[str] = None
