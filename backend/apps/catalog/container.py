from __future__ import annotations

from django.core.cache import cache

from apps.remote.session import StorefrontSession
from .repositories import RemoteCatalogRepository
from .services import CatalogService


def build_catalog_service(
    session: StorefrontSession, *, disable_cache: bool = False
) -> CatalogService:
    return CatalogService(
        repository=RemoteCatalogRepository(session.client),
        cache_backend=cache,
        disable_cache=disable_cache,
    )
