from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol


class CatalogRepositoryProtocol(Protocol):
    def list_products(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        ...

    def get_product(self, product_id: str) -> Dict[str, Any]:
        ...

    def list_categories(self) -> List[Dict[str, Any]]:
        ...

    def list_packages(self) -> List[Dict[str, Any]]:
        ...

    def list_comments(self, kind: str, item_id: str) -> List[Dict[str, Any]]:
        ...

    def add_comment(
        self, kind: str, item_id: str, comment: str, rating: int
    ) -> Dict[str, Any]:
        ...

    def get_rating(self, kind: str, item_id: str) -> Dict[str, Any]:
        ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        ...
