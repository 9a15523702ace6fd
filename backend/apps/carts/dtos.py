from dataclasses import dataclass, field
from typing import List, Optional

from apps.catalog.dtos import PackageDTO, ProductDTO


@dataclass
class CartItemDTO:
    id: str
    quantity: int
    product_id: Optional[str] = None
    package_id: Optional[str] = None
    product: Optional[ProductDTO] = None
    package: Optional[PackageDTO] = None

    @property
    def unit_price(self) -> float:
        if self.package is not None:
            return self.package.price
        if self.product is not None:
            return self.product.price
        return 0.0

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass
class CartState:
    items: List[CartItemDTO] = field(default_factory=list)
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> float:
        return sum(item.line_total for item in self.items)
