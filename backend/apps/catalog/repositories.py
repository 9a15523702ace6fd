from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from apps.common.repository import RemoteRepository
from apps.remote.exceptions import UnexpectedResponseError
from apps.remote.shapes import extract_list, mappings_only, unwrap_data

COMMENTABLE_KINDS = ("products", "packages")

EMPTY_RATING: Dict[str, Any] = {
    "average_rating": 0,
    "total_ratings": 0,
    "user_rating": None,
}


class RemoteCatalogRepository(RemoteRepository):
    """Products, packages, categories, comments and ratings on the store backend."""

    def _check_kind(self, kind: str) -> str:
        if kind not in COMMENTABLE_KINDS:
            raise ValueError(f"Unknown catalog kind: {kind}")
        return kind

    def list_products(self, search: Optional[str] = None) -> List[Dict[str, Any]]:
        query = {"search": search} if search else None
        response = self.client.get_json("/products", query=query)
        if isinstance(response, list):
            return mappings_only(response)
        # search results come back as {"products": [...]}
        items = extract_list(response, "products")
        if items is None:
            self.logger.warning(
                "Unexpected products payload", payload_type=type(response).__name__
            )
            raise UnexpectedResponseError("Failed to load products", payload=response)
        return mappings_only(items)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        response = unwrap_data(self.client.get_json(f"/products/{product_id}"))
        if not isinstance(response, Mapping):
            raise UnexpectedResponseError("Failed to load product", payload=response)
        return dict(response)

    def _list_resource(self, path: str, label: str) -> List[Dict[str, Any]]:
        response = self.client.get_json(path)
        if not isinstance(response, list):
            self.logger.warning(
                "Unexpected list payload",
                resource=label,
                payload_type=type(response).__name__,
            )
            raise UnexpectedResponseError(f"Failed to load {label}", payload=response)
        return mappings_only(response)

    def list_categories(self) -> List[Dict[str, Any]]:
        return self._list_resource("/categories", "categories")

    def list_packages(self) -> List[Dict[str, Any]]:
        return self._list_resource("/packages", "packages")

    def list_comments(self, kind: str, item_id: str) -> List[Dict[str, Any]]:
        response = self.client.get_json(f"/{self._check_kind(kind)}/{item_id}/comments")
        return mappings_only(extract_list(response))

    def add_comment(
        self, kind: str, item_id: str, comment: str, rating: int
    ) -> Dict[str, Any]:
        response = self.client.post_json(
            f"/{self._check_kind(kind)}/{item_id}/comments",
            body={"comment": comment, "rating": rating},
        )
        response = unwrap_data(response)
        return dict(response) if isinstance(response, Mapping) else {}

    def get_rating(self, kind: str, item_id: str) -> Dict[str, Any]:
        response = unwrap_data(
            self.client.get_json(f"/{self._check_kind(kind)}/{item_id}/rating")
        )
        if not isinstance(response, Mapping):
            return dict(EMPTY_RATING)
        return {**EMPTY_RATING, **response}
