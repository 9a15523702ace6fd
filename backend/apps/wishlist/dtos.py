from dataclasses import dataclass, field
from typing import List, Optional

from apps.catalog.dtos import PackageDTO, ProductDTO


@dataclass
class WishlistItemDTO:
    id: str
    product_id: Optional[str] = None
    package_id: Optional[str] = None
    product: Optional[ProductDTO] = None
    package: Optional[PackageDTO] = None


@dataclass
class WishlistState:
    items: List[WishlistItemDTO] = field(default_factory=list)
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def item_count(self) -> int:
        return len(self.items)

    def contains_product(self, product_id: str) -> bool:
        return any(item.product_id == product_id for item in self.items)

    def contains_package(self, package_id: str) -> bool:
        return any(item.package_id == package_id for item in self.items)
