from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from rest_framework import status

from apps.api.exceptions import ApplicationError
from apps.carts.services import CartStore
from apps.common import get_logger
from apps.remote.exceptions import RemoteAPIError, UnexpectedResponseError
from apps.users.dtos import AppUserDTO
from apps.users.storage import UserStorage
from apps.wishlist.services import WishlistStore

logger = get_logger(__name__).bind(component="auth", layer="service")

DEFAULT_ROLE = "customer"


class UserBlockedError(ApplicationError):
    def __init__(self, user_id: Optional[str] = None):
        super().__init__(
            "FORBIDDEN",
            "Your account has been blocked",
            status_code=status.HTTP_403_FORBIDDEN,
            extra={"blocked": True},
        )
        self.user_id = user_id


@dataclass
class AuthResult:
    token: str
    user: AppUserDTO
    cart_synced: bool = False
    wishlist_synced: bool = False


def _requires_role(exc: RemoteAPIError) -> bool:
    text = str(exc)
    if exc.errors:
        text = f"{text} {json.dumps(exc.errors)}"
    text = text.lower()
    return "role" in text and "required" in text


class AuthService:
    """
    Login, registration and session bookkeeping for one storefront session.

    The token and the signed-in user live in the session storage; the cart and
    wishlist collected while browsing as a guest are merged into the
    customer's account right after login or registration.
    """

    def __init__(self, client, config, users: UserStorage, cart: CartStore, wishlist: WishlistStore):
        self.client = client
        self.config = config
        self.users = users
        self.cart = cart
        self.wishlist = wishlist
        self.logger = logger.bind(service="AuthService", guest_id=config.guest_id)

    @property
    def current_user(self) -> Optional[AppUserDTO]:
        return self.users.get_user()

    @property
    def is_authenticated(self) -> bool:
        return self.config.is_authenticated

    def _parse_auth_response(self, response: Any, action: str):
        if not isinstance(response, Mapping):
            raise UnexpectedResponseError(f"Invalid {action} response", payload=response)
        token = response.get("access_token")
        user = response.get("user")
        if not isinstance(token, str) or not token or not isinstance(user, Mapping):
            raise UnexpectedResponseError(f"Invalid {action} response", payload=response)
        return token, AppUserDTO.from_raw(user)

    def _load_guest_state(self) -> None:
        # must run while requests still carry the guest identity
        self.cart.load_cart()
        self.wishlist.load_wishlist()

    def _start_session(self, token: str, user: AppUserDTO) -> AuthResult:
        self.config.set_auth_token(token)
        self.users.save_user(user)
        result = AuthResult(token=token, user=user)
        result.cart_synced = self.cart.sync_guest()
        result.wishlist_synced = self.wishlist.sync_guest()
        self.logger.info(
            "Session started",
            user_id=user.id,
            cart_synced=result.cart_synced,
            wishlist_synced=result.wishlist_synced,
        )
        return result

    def login(self, credentials: Dict[str, Any]) -> AuthResult:
        self.logger.info("Login attempt", email=credentials.get("email"))
        self._load_guest_state()
        response = self.client.post_json("/login", body=credentials)
        token, user = self._parse_auth_response(response, "login")
        return self._start_session(token, user)

    def register(self, data: Dict[str, Any]) -> AuthResult:
        confirmation = data.get("password_confirmation")
        if confirmation is None:
            confirmation = data.get("passwordConfirmation")
        payload = {
            "name": str(data.get("name") or "").strip(),
            "email": str(data.get("email") or "").strip(),
            "password": str(data.get("password") or ""),
            "password_confirmation": str(confirmation or ""),
        }
        self.logger.info("Registration attempt", email=payload["email"])
        self._load_guest_state()
        try:
            response = self.client.post_json("/register", body=payload)
        except RemoteAPIError as exc:
            if not _requires_role(exc):
                raise
            self.logger.info("Backend requires a role; retrying registration", role=DEFAULT_ROLE)
            response = self.client.post_json("/register", body={**payload, "role": DEFAULT_ROLE})
        token, user = self._parse_auth_response(response, "register")
        return self._start_session(token, user.copy_with(role=DEFAULT_ROLE))

    def logout(self) -> bool:
        """End the session; the backend call is best effort and local state is always cleared."""
        user = self.users.get_user()
        ok = True
        try:
            if self.config.is_authenticated:
                self.client.post_json("/logout")
        except RemoteAPIError as exc:
            ok = False
            self.logger.warning("Backend logout failed", status=exc.status_code, error=str(exc))
        finally:
            self.config.set_auth_token(None)
            self.users.save_user(None)
        self.logger.info("Logged out", user_id=user.id if user else None)
        return ok

    def fetch_user(self) -> AppUserDTO:
        try:
            response = self.client.get_json("/user")
        except RemoteAPIError as exc:
            if exc.is_unauthorized:
                self.logger.info("Token rejected; logging out")
                self.logout()
            raise
        if not isinstance(response, Mapping):
            raise UnexpectedResponseError("Invalid user response", payload=response)
        user = AppUserDTO.from_raw(response)
        if user.is_blocked:
            self.logger.warning("Blocked user signed out", user_id=user.id)
            self.logout()
            raise UserBlockedError(user.id)
        self.users.save_user(user)
        return user

    def initialize_session(self) -> Optional[AppUserDTO]:
        user = self.users.get_user()
        if not self.config.is_authenticated or user is not None:
            return user
        try:
            return self.fetch_user()
        except UserBlockedError:
            return None
        except RemoteAPIError as exc:
            if exc.is_unauthorized or exc.is_forbidden:
                self.logout()
            else:
                self.logger.info("Session user could not be restored", error=str(exc))
            return None

    def update_user(self, **fields) -> Optional[AppUserDTO]:
        return self.users.update_user(**fields)
