from __future__ import annotations

from typing import Callable, List, Optional, TypeVar

from django.conf import settings

from apps.common import get_logger
from apps.common.i18n import normalize_language_code
from .dtos import CategoryDTO, CommentDTO, PackageDTO, ProductDTO, RatingDTO
from .mappers import (
    CategoryMapper,
    CommentMapper,
    PackageMapper,
    ProductMapper,
    RatingMapper,
)
from .protocols import CacheBackendProtocol, CatalogRepositoryProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")

T = TypeVar("T")


class CatalogService:
    def __init__(
        self,
        repository: CatalogRepositoryProtocol,
        cache_backend: CacheBackendProtocol,
        disable_cache: bool = False,
        timeout: Optional[int] = None,
    ):
        self.repository = repository
        self.cache = cache_backend
        self.disable_cache = disable_cache
        self.timeout = (
            timeout if timeout is not None else getattr(settings, "CACHE_TTL", 300)
        )
        self.logger = logger.bind(service="CatalogService")
        # Caching keys
        self._cache_prefix = "catalog"
        self._cache_version_key = f"{self._cache_prefix}:version"
        self._default_version = 1

    def _get_cache_version(self) -> int:
        v = self.cache.get(self._cache_version_key)
        return v or self._default_version

    def invalidate(self) -> int:
        v = self._get_cache_version()
        # Version key should not expire
        self.cache.set(self._cache_version_key, v + 1, timeout=None)
        self.logger.info("Bumped catalog cache version", new_version=v + 1)
        return v + 1

    def _cache_key(self, resource: str, language: str) -> str:
        version = self._get_cache_version()
        return f"{self._cache_prefix}:{resource}:v{version}:lang-{language}"

    def _cached(self, resource: str, language: Optional[str], loader: Callable[[], T]) -> T:
        language = normalize_language_code(language)
        if self.disable_cache:
            return loader()
        # Read-through cache per resource and language
        key = self._cache_key(resource, language)
        cached = self.cache.get(key)
        if cached is not None:
            self.logger.debug("Catalog cache hit", cache_key=key)
            return cached
        self.logger.debug("Catalog cache miss", cache_key=key)
        data = loader()
        self.cache.set(key, data, timeout=self.timeout)
        return data

    def list_products(
        self, *, language: Optional[str] = None, search: Optional[str] = None
    ) -> List[ProductDTO]:
        if search:
            self.logger.debug("Searching products on backend", search=search)
            return ProductMapper.many_from_raw(self.repository.list_products(search=search))
        return self._cached(
            "products",
            language,
            lambda: ProductMapper.many_from_raw(self.repository.list_products()),
        )

    def search(self, query: str, *, language: Optional[str] = None) -> List[ProductDTO]:
        """Case-insensitive match on name and description in both languages."""
        products = self.list_products(language=language)
        needle = (query or "").strip().lower()
        if not needle:
            return products
        matches = []
        for product in products:
            haystack = (
                product.name,
                product.name_ar,
                product.description,
                product.description_ar,
            )
            if any(needle in value.lower() for value in haystack if value):
                matches.append(product)
        self.logger.debug("Product search", query=needle, matches=len(matches))
        return matches

    def get_product(self, product_id: str) -> ProductDTO:
        self.logger.debug("Fetching product", product_id=product_id)
        return ProductMapper.from_raw(self.repository.get_product(product_id))

    def list_categories(self, *, language: Optional[str] = None) -> List[CategoryDTO]:
        return self._cached(
            "categories",
            language,
            lambda: CategoryMapper.many_from_raw(self.repository.list_categories()),
        )

    def list_packages(self, *, language: Optional[str] = None) -> List[PackageDTO]:
        return self._cached(
            "packages",
            language,
            lambda: PackageMapper.many_from_raw(self.repository.list_packages()),
        )

    def list_comments(self, kind: str, item_id: str) -> List[CommentDTO]:
        return CommentMapper.many_from_raw(self.repository.list_comments(kind, item_id))

    def add_comment(self, kind: str, item_id: str, comment: str, rating: int = 5) -> CommentDTO:
        self.logger.info("Posting comment", kind=kind, item_id=item_id, rating=rating)
        raw = self.repository.add_comment(kind, item_id, comment, rating)
        if not raw:
            return CommentDTO(id="", comment=comment, created_at="", rating=rating)
        return CommentMapper.from_raw(raw)

    def get_rating(self, kind: str, item_id: str) -> RatingDTO:
        return RatingMapper.from_raw(self.repository.get_rating(kind, item_id))
