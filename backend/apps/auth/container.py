from __future__ import annotations

from apps.carts.container import build_cart_store
from apps.remote.session import StorefrontSession
from apps.users.storage import UserStorage
from apps.wishlist.container import build_wishlist_store
from .services import AuthService


def build_auth_service(session: StorefrontSession) -> AuthService:
    return AuthService(
        client=session.client,
        config=session.config,
        users=UserStorage(session.storage),
        cart=build_cart_store(session),
        wishlist=build_wishlist_store(session),
    )
