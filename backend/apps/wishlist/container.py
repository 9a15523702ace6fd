from __future__ import annotations

from apps.guests.storage import GuestStorage
from apps.remote.session import StorefrontSession
from .repositories import RemoteWishlistRepository
from .services import WishlistStore


def build_wishlist_store(session: StorefrontSession) -> WishlistStore:
    return WishlistStore(
        repository=RemoteWishlistRepository(session.client),
        guest_storage=GuestStorage(session.storage),
        config=session.config,
    )
