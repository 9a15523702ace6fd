from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rest_framework.authentication import BaseAuthentication

from apps.common import get_logger

logger = get_logger(__name__).bind(component="api", layer="authentication")


@dataclass(frozen=True)
class StorefrontUser:
    """Customer identified by a bearer token issued by the store backend."""

    token: str
    guest_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False


class StorefrontTokenAuthentication(BaseAuthentication):
    """
    Treat the session's bearer token as the credential.

    The token is not verified locally; the store backend rejects stale tokens
    and that rejection surfaces as a 401.
    """

    keyword = "Bearer"

    def authenticate(self, request):
        session = getattr(request, "storefront", None)
        if session is None or not session.is_authenticated:
            return None
        token = session.config.auth_token
        logger.debug("Authenticated storefront session", guest_id=session.guest_id)
        return StorefrontUser(token=token, guest_id=session.guest_id), token

    def authenticate_header(self, request):
        return self.keyword
