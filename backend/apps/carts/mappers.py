import time
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from apps.catalog.mappers import PackageMapper, ProductMapper
from apps.common.coerce import optional_str, parse_int
from .dtos import CartItemDTO


def line_targets(raw: Mapping[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """Product and package ids of a raw cart or wishlist line."""
    product_id = optional_str(
        raw.get("product_id") if raw.get("product_id") is not None else raw.get("productId")
    )
    package_id = optional_str(
        raw.get("package_id") if raw.get("package_id") is not None else raw.get("packageId")
    )
    product = raw.get("product")
    package = raw.get("package")
    if product_id is None and isinstance(product, Mapping):
        product_id = optional_str(product.get("id"))
    if package_id is None and isinstance(package, Mapping):
        package_id = optional_str(package.get("id"))
    return product_id or None, package_id or None


def line_id(raw: Mapping[str, Any], keys: Sequence[str]) -> str:
    for key in keys:
        value = raw.get(key)
        if value is not None and str(value):
            return str(value)
    return ""


def now_ms() -> int:
    return int(time.time() * 1000)


class CartItemMapper:
    id_keys = ("id", "cart_id")

    @classmethod
    def from_raw(cls, raw: Any) -> Optional[CartItemDTO]:
        if not isinstance(raw, Mapping):
            return None
        product_id, package_id = line_targets(raw)
        if product_id is None and package_id is None:
            return None

        product = package = None
        if product_id:
            nested = raw.get("product")
            product = (
                ProductMapper.from_raw(nested)
                if isinstance(nested, Mapping)
                else ProductMapper.placeholder(product_id)
            )
        if package_id:
            nested = raw.get("package")
            package = (
                PackageMapper.from_raw(nested)
                if isinstance(nested, Mapping)
                else PackageMapper.placeholder(package_id)
            )

        item_id = line_id(raw, cls.id_keys) or f"item_{product_id or package_id}_{now_ms()}"
        return CartItemDTO(
            id=item_id,
            quantity=parse_int(raw.get("quantity"), 1),
            product_id=product_id,
            package_id=package_id,
            product=product,
            package=package,
        )

    @classmethod
    def many_from_raw(cls, items: Iterable[Any]) -> List[CartItemDTO]:
        parsed = []
        for raw in items:
            item = cls.from_raw(raw)
            if item is not None:
                parsed.append(item)
        return parsed
