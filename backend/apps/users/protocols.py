from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class ProfileRepositoryProtocol(Protocol):
    def fetch_profile(self) -> Dict[str, Any]:
        ...

    def update_profile(self, body: Dict[str, Any]) -> Dict[str, Any]:
        ...

    def update_avatar_url(self, avatar_url: str) -> None:
        ...

    def change_password(self, current_password: str, new_password: str) -> None:
        ...

    def fetch_public_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        ...
