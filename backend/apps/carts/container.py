from __future__ import annotations

from apps.guests.storage import GuestStorage
from apps.remote.session import StorefrontSession
from .repositories import RemoteCartRepository
from .services import CartStore


def build_cart_store(session: StorefrontSession) -> CartStore:
    return CartStore(
        repository=RemoteCartRepository(session.client),
        guest_storage=GuestStorage(session.storage),
        config=session.config,
    )
