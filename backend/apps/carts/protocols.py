from __future__ import annotations

from typing import Any, Dict, List, Protocol


class CartRepositoryProtocol(Protocol):
    def fetch_cart(self) -> List[Any]:
        ...

    def add_product(self, product_id: str, quantity: int = 1) -> Dict[str, Any]:
        ...

    def add_package(self, package_id: str, quantity: int = 1) -> Dict[str, Any]:
        ...

    def update_quantity(self, item_id: str, quantity: int) -> Dict[str, Any]:
        ...

    def remove_item(self, item_id: str) -> None:
        ...

    def clear(self) -> None:
        ...

    def sync_guest(self, items: List[Dict[str, Any]]) -> None:
        ...
