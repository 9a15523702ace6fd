from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from apps.common.coerce import optional_str, parse_bool

# Laravel user columns surfaced to clients through additional_data
PROFILE_KEYS = (
    "google_id",
    "avatar_url",
    "bio",
    "location",
    "phone",
    "is_private",
    "is_blocked",
    "blocked_at",
    "blocked_by",
    "email_verified_at",
    "profile_verified_at",
    "created_at",
    "updated_at",
    "status",
)


@dataclass
class AppUserDTO:
    id: str
    name: str
    email: str
    role: Optional[str] = None
    is_blocked: Optional[bool] = None
    additional_data: Optional[Dict[str, Any]] = None

    @staticmethod
    def from_raw(raw: Mapping[str, Any]) -> "AppUserDTO":
        additional: Dict[str, Any] = {}
        existing = raw.get("additionalData", raw.get("additional_data"))
        if isinstance(existing, Mapping):
            additional.update(existing)
        for key in PROFILE_KEYS:
            if key in raw and key not in additional:
                additional[key] = raw[key]
        blocked = raw.get("isBlocked")
        if blocked is None:
            blocked = raw.get("is_blocked")
        return AppUserDTO(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or ""),
            email=str(raw.get("email") or ""),
            role=optional_str(raw.get("role")),
            is_blocked=parse_bool(blocked),
            additional_data=additional or None,
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "isBlocked": self.is_blocked,
            "additionalData": self.additional_data,
        }

    def copy_with(self, **changes) -> "AppUserDTO":
        return replace(self, **changes)

    def profile_value(self, key: str) -> Any:
        return (self.additional_data or {}).get(key)
