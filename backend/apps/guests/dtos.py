from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from apps.common.coerce import optional_str, parse_int


@dataclass
class GuestCartItem:
    id: str
    product_id: Optional[str] = None
    package_id: Optional[str] = None
    quantity: int = 1

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "package_id": self.package_id,
            "quantity": self.quantity,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "GuestCartItem":
        return cls(
            id=str(data.get("id") or ""),
            product_id=optional_str(data.get("product_id")),
            package_id=optional_str(data.get("package_id")),
            quantity=parse_int(data.get("quantity"), 1),
        )


@dataclass
class GuestWishlistItem:
    id: str
    product_id: Optional[str] = None
    package_id: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "package_id": self.package_id,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "GuestWishlistItem":
        return cls(
            id=str(data.get("id") or ""),
            product_id=optional_str(data.get("product_id")),
            package_id=optional_str(data.get("package_id")),
        )
