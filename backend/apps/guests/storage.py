"""Cart and wishlist kept for a signed-out visitor until they log in."""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, List, Optional, TypeVar

from apps.common import get_logger
from apps.common.storage import KeyValueStorage
from apps.remote.config import generate_guest_id
from .dtos import GuestCartItem, GuestWishlistItem

logger = get_logger(__name__).bind(component="guests", layer="storage")

CART_STORAGE_KEY = "guest_cart"
WISHLIST_STORAGE_KEY = "guest_wishlist"

T = TypeVar("T")


def _same_target(a, b) -> bool:
    if a.product_id is not None and a.product_id == b.product_id:
        return True
    return a.package_id is not None and a.package_id == b.package_id


class GuestStorage:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.logger = logger.bind(namespace=storage.namespace)

    def _read(self, key: str, factory: Callable[[Any], T]) -> List[T]:
        raw = self.storage.get_json(key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            self.logger.warning("Discarding corrupt guest data", key=key)
            return []
        items = []
        for entry in raw:
            if isinstance(entry, dict):
                items.append(factory(entry))
        return items

    # cart

    def get_cart(self) -> List[GuestCartItem]:
        return self._read(CART_STORAGE_KEY, GuestCartItem.from_json)

    def save_cart(self, items: List[GuestCartItem]) -> None:
        self.storage.set_json(CART_STORAGE_KEY, [item.to_json() for item in items])

    def add_to_cart(self, item: GuestCartItem) -> List[GuestCartItem]:
        cart = self.get_cart()
        for index, existing in enumerate(cart):
            if _same_target(existing, item):
                cart[index] = replace(existing, quantity=existing.quantity + item.quantity)
                break
        else:
            cart.append(replace(item, id=item.id or generate_guest_id()))
        self.save_cart(cart)
        return cart

    def update_cart_item(self, item_id: str, quantity: int) -> List[GuestCartItem]:
        if quantity <= 0:
            return self.remove_from_cart(item_id)
        cart = [
            replace(item, quantity=quantity) if item.id == item_id else item
            for item in self.get_cart()
        ]
        self.save_cart(cart)
        return cart

    def remove_from_cart(self, item_id: str) -> List[GuestCartItem]:
        cart = [item for item in self.get_cart() if item.id != item_id]
        self.save_cart(cart)
        return cart

    def find_cart_item(
        self, *, product_id: Optional[str] = None, package_id: Optional[str] = None
    ) -> Optional[GuestCartItem]:
        wanted = GuestCartItem(id="", product_id=product_id, package_id=package_id)
        for item in self.get_cart():
            if _same_target(item, wanted):
                return item
        return None

    def clear_cart(self) -> None:
        self.storage.remove(CART_STORAGE_KEY)

    # wishlist

    def get_wishlist(self) -> List[GuestWishlistItem]:
        return self._read(WISHLIST_STORAGE_KEY, GuestWishlistItem.from_json)

    def save_wishlist(self, items: List[GuestWishlistItem]) -> None:
        self.storage.set_json(WISHLIST_STORAGE_KEY, [item.to_json() for item in items])

    def add_to_wishlist(self, item: GuestWishlistItem) -> List[GuestWishlistItem]:
        wishlist = self.get_wishlist()
        if any(_same_target(existing, item) for existing in wishlist):
            return wishlist
        wishlist.append(replace(item, id=item.id or generate_guest_id()))
        self.save_wishlist(wishlist)
        return wishlist

    def remove_from_wishlist(
        self, *, product_id: Optional[str] = None, package_id: Optional[str] = None
    ) -> List[GuestWishlistItem]:
        wanted = GuestWishlistItem(id="", product_id=product_id, package_id=package_id)
        wishlist = [item for item in self.get_wishlist() if not _same_target(item, wanted)]
        self.save_wishlist(wishlist)
        return wishlist

    def is_in_wishlist(
        self, *, product_id: Optional[str] = None, package_id: Optional[str] = None
    ) -> bool:
        wanted = GuestWishlistItem(id="", product_id=product_id, package_id=package_id)
        return any(_same_target(item, wanted) for item in self.get_wishlist())

    def clear_wishlist(self) -> None:
        self.storage.remove(WISHLIST_STORAGE_KEY)
