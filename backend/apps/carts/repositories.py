from __future__ import annotations

from typing import Any, Dict, List, Mapping

from apps.common.repository import RemoteRepository
from apps.remote.exceptions import RemoteAPIError
from apps.remote.shapes import extract_collection, normalize_mutation_response

MUTATION_KEYS = ("items", "data", "cart")


class RemoteCartRepository(RemoteRepository):
    resource = "cart"

    def fetch_cart(self) -> List[Any]:
        try:
            response = self.get()
        except RemoteAPIError as exc:
            self.logger.warning("Fetching cart failed", error=str(exc), status=exc.status_code)
            return []
        items = extract_collection(
            response,
            top_keys=("items", "data", "cart"),
            nested_keys=("items", "cart_items", "data"),
        )
        self.logger.debug("Fetched cart", count=len(items))
        return items

    def add_product(self, product_id: str, quantity: int = 1) -> Dict[str, Any]:
        response = self.post(body={"product_id": product_id, "quantity": quantity})
        return normalize_mutation_response(response, MUTATION_KEYS)

    def add_package(self, package_id: str, quantity: int = 1) -> Dict[str, Any]:
        # the backend takes no quantity for packages; it adds one or increments
        self.logger.debug("Adding package", package_id=package_id, quantity=quantity)
        response = self.post("package", body={"package_id": package_id})
        return normalize_mutation_response(response, MUTATION_KEYS)

    def update_quantity(self, item_id: str, quantity: int) -> Dict[str, Any]:
        response = self.put(item_id, body={"quantity": quantity})
        return dict(response) if isinstance(response, Mapping) else {"success": True}

    def remove_item(self, item_id: str) -> None:
        self.delete(item_id)

    def clear(self) -> None:
        self.delete()

    def sync_guest(self, items: List[Dict[str, Any]]) -> None:
        self.post("sync-guest", body={"items": items})
