from __future__ import annotations

from apps.remote.session import StorefrontSession
from .repositories import RemoteProfileRepository
from .services import ProfileService
from .storage import UserStorage


def build_profile_service(session: StorefrontSession) -> ProfileService:
    return ProfileService(
        repository=RemoteProfileRepository(session.client),
        users=UserStorage(session.storage),
    )
