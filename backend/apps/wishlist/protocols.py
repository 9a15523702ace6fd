from __future__ import annotations

from typing import Any, Dict, List, Protocol


class WishlistRepositoryProtocol(Protocol):
    def fetch_wishlist(self) -> List[Any]:
        ...

    def add_product(self, product_id: str) -> Dict[str, Any]:
        ...

    def add_package(self, package_id: str) -> Dict[str, Any]:
        ...

    def remove_product(self, product_id: str) -> None:
        ...

    def remove_package(self, package_id: str) -> None:
        ...

    def contains_product(self, product_id: str) -> bool:
        ...

    def contains_package(self, package_id: str) -> bool:
        ...

    def sync_guest(self, items: List[Dict[str, Any]]) -> None:
        ...
