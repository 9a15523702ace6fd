from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from apps.common.coerce import optional_str, parse_int
from .dtos import ChatMessageDTO, ChatUserDTO, ConversationDTO


def _timestamp(value: Any) -> datetime:
    if isinstance(value, str):
        try:
            parsed = parse_datetime(value)
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed
    return timezone.now()


def _mapping(value: Any) -> Optional[Mapping[str, Any]]:
    return value if isinstance(value, Mapping) else None


class ChatUserMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> ChatUserDTO:
        return ChatUserDTO(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or "User"),
            email=optional_str(raw.get("email")),
            avatar_url=optional_str(raw.get("avatar_url")),
            role=optional_str(raw.get("role")),
            is_online=raw.get("is_online") is True,
        )

    @staticmethod
    def many_from_raw(items: Iterable[Any]) -> List[ChatUserDTO]:
        return [ChatUserMapper.from_raw(i) for i in items if isinstance(i, Mapping)]


class ChatMessageMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> ChatMessageDTO:
        sender = _mapping(raw.get("sender"))
        order = _mapping(raw.get("order"))
        order_id = raw.get("order_id")
        if order_id is None and order is not None:
            order_id = order.get("id")
        return ChatMessageDTO(
            id=str(raw.get("id") or ""),
            message=str(raw.get("message") or ""),
            user_id=optional_str(raw.get("from_user_id")),
            timestamp=_timestamp(raw.get("created_at")),
            to_user_id=optional_str(raw.get("to_user_id")),
            image_url=optional_str(raw.get("image_url")) or None,
            is_read=raw.get("is_read") is True,
            order_id=optional_str(order_id),
            sender=ChatUserMapper.from_raw(sender) if sender else None,
            message_data=dict(raw),
        )

    @staticmethod
    def many_from_raw(items: Iterable[Any]) -> List[ChatMessageDTO]:
        return [ChatMessageMapper.from_raw(i) for i in items if isinstance(i, Mapping)]


class ConversationMapper:
    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> ConversationDTO:
        user_raw = dict(_mapping(raw.get("user")) or {})
        # conversations keyed by the other party's id
        user_raw.setdefault("id", raw.get("id"))
        user = ChatUserMapper.from_raw(user_raw)
        last = _mapping(raw.get("last_message"))
        order = _mapping(raw.get("order"))
        return ConversationDTO(
            id=str(raw.get("id") if raw.get("id") is not None else user.id),
            user=user,
            last_message=ChatMessageMapper.from_raw(last) if last else None,
            unread_count=parse_int(raw.get("unread_count"), 0),
            order_id=optional_str(order.get("id") if order else raw.get("order_id")),
        )

    @staticmethod
    def many_from_raw(items: Iterable[Any]) -> List[ConversationDTO]:
        return [ConversationMapper.from_raw(i) for i in items if isinstance(i, Mapping)]
