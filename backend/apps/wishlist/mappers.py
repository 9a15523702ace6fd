from typing import Any, Iterable, List, Mapping, Optional

from apps.carts.mappers import line_id, line_targets, now_ms
from apps.catalog.mappers import PackageMapper, ProductMapper
from .dtos import WishlistItemDTO


class WishlistItemMapper:
    id_keys = ("id", "wishlist_id")

    @classmethod
    def from_raw(cls, raw: Any) -> Optional[WishlistItemDTO]:
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
        return WishlistItemDTO(
            id=line_id(raw, cls.id_keys) or str(now_ms()),
            product_id=product_id,
            package_id=package_id,
            product=product,
            package=package,
        )

    @classmethod
    def many_from_raw(cls, items: Iterable[Any]) -> List[WishlistItemDTO]:
        return [item for item in map(cls.from_raw, items) if item is not None]
