from __future__ import annotations

from typing import Any, Dict, List

from apps.carts.mappers import line_targets
from apps.common.repository import RemoteRepository
from apps.remote.exceptions import RemoteAPIError
from apps.remote.shapes import extract_collection, mappings_only, normalize_mutation_response

MUTATION_KEYS = ("items", "data", "wishlist")


class RemoteWishlistRepository(RemoteRepository):
    resource = "wishlist"

    def fetch_wishlist(self) -> List[Any]:
        try:
            response = self.get()
        except RemoteAPIError as exc:
            self.logger.warning("Fetching wishlist failed", error=str(exc), status=exc.status_code)
            return []
        return extract_collection(
            response,
            top_keys=("items", "data", "wishlist"),
            nested_keys=("items", "wishlist_items", "data"),
            merge_root=True,
        )

    def add_product(self, product_id: str) -> Dict[str, Any]:
        return normalize_mutation_response(
            self.post(body={"product_id": product_id}), MUTATION_KEYS
        )

    def add_package(self, package_id: str) -> Dict[str, Any]:
        return normalize_mutation_response(
            self.post(body={"package_id": package_id}), MUTATION_KEYS
        )

    def _remove(self, kind: str, item_id: str) -> None:
        try:
            self.delete(kind, item_id)
        except RemoteAPIError as exc:
            self.logger.info(
                "Wishlist delete by path failed, retrying with query",
                kind=kind,
                item_id=item_id,
                status=exc.status_code,
            )
            self.delete(query={f"{kind}_id": item_id})

    def remove_product(self, product_id: str) -> None:
        self._remove("product", product_id)

    def remove_package(self, package_id: str) -> None:
        self._remove("package", package_id)

    def _contains(self, index: int, target_id: str) -> bool:
        for raw in mappings_only(self.fetch_wishlist()):
            if line_targets(raw)[index] == target_id:
                return True
        return False

    def contains_product(self, product_id: str) -> bool:
        return self._contains(0, product_id)

    def contains_package(self, package_id: str) -> bool:
        return self._contains(1, package_id)

    def sync_guest(self, items: List[Dict[str, Any]]) -> None:
        self.post("sync-guest", body={"items": items})
