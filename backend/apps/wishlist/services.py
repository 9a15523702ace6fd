from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from apps.common import get_logger
from apps.guests.dtos import GuestWishlistItem
from apps.guests.merge import merge_wishlist_items
from apps.guests.storage import GuestStorage
from apps.remote.exceptions import RemoteAPIError
from .dtos import WishlistState
from .mappers import WishlistItemMapper
from .protocols import WishlistRepositoryProtocol

logger = get_logger(__name__).bind(component="wishlist", layer="service")


class WishlistStore:
    """Wishlist state for one storefront session, mirrored into guest storage while signed out."""

    def __init__(
        self,
        repository: WishlistRepositoryProtocol,
        guest_storage: GuestStorage,
        config,
    ):
        self.repository = repository
        self.guest_storage = guest_storage
        self.config = config
        self.state = WishlistState()
        self.last_error: Optional[RemoteAPIError] = None
        self.logger = logger.bind(service="WishlistStore", guest_id=config.guest_id)

    @property
    def is_guest(self) -> bool:
        return not self.config.is_authenticated

    def _fail(self, action: str, exc: RemoteAPIError, **context) -> bool:
        self.logger.warning(
            "Wishlist operation failed",
            action=action,
            status=exc.status_code,
            error=str(exc),
            **context,
        )
        self.last_error = exc
        self.state.is_loading = False
        self.state.error = str(exc)
        return False

    def _replace_items(self, raw_items: List[Any]) -> None:
        self.state = WishlistState(items=WishlistItemMapper.many_from_raw(raw_items))

    def load_wishlist(self) -> WishlistState:
        self.state.is_loading = True
        self.state.error = None
        self._replace_items(self.repository.fetch_wishlist())
        self.logger.debug("Wishlist loaded", items=self.state.item_count)
        return self.state

    def _after_add(self, response: Dict[str, Any]) -> None:
        items = response.get("items")
        if isinstance(items, list):
            self._replace_items(items)
        else:
            self.load_wishlist()

    def add_product(self, product_id: str) -> bool:
        self.logger.info("Adding product to wishlist", product_id=product_id)
        try:
            response = self.repository.add_product(product_id)
        except RemoteAPIError as exc:
            return self._fail("add_product", exc, product_id=product_id)
        if self.is_guest:
            self.guest_storage.add_to_wishlist(GuestWishlistItem(id="", product_id=product_id))
        self._after_add(response)
        return True

    def add_package(self, package_id: str) -> bool:
        self.logger.info("Adding package to wishlist", package_id=package_id)
        try:
            response = self.repository.add_package(package_id)
        except RemoteAPIError as exc:
            return self._fail("add_package", exc, package_id=package_id)
        if self.is_guest:
            self.guest_storage.add_to_wishlist(GuestWishlistItem(id="", package_id=package_id))
        self._after_add(response)
        return True

    def remove_product(self, product_id: str) -> bool:
        self.logger.info("Removing product from wishlist", product_id=product_id)
        try:
            self.repository.remove_product(product_id)
        except RemoteAPIError as exc:
            return self._fail("remove_product", exc, product_id=product_id)
        if self.is_guest:
            self.guest_storage.remove_from_wishlist(product_id=product_id)
        self.load_wishlist()
        return True

    def remove_package(self, package_id: str) -> bool:
        self.logger.info("Removing package from wishlist", package_id=package_id)
        try:
            self.repository.remove_package(package_id)
        except RemoteAPIError as exc:
            return self._fail("remove_package", exc, package_id=package_id)
        if self.is_guest:
            self.guest_storage.remove_from_wishlist(package_id=package_id)
        self.load_wishlist()
        return True

    def toggle_product(self, product_id: str) -> Tuple[bool, bool]:
        """Returns ``(ok, in_wishlist)`` after the toggle."""
        if not self.state.items:
            self.load_wishlist()
        if self.state.contains_product(product_id):
            ok = self.remove_product(product_id)
            return ok, not ok
        ok = self.add_product(product_id)
        return ok, ok

    def toggle_package(self, package_id: str) -> Tuple[bool, bool]:
        if not self.state.items:
            self.load_wishlist()
        if self.state.contains_package(package_id):
            ok = self.remove_package(package_id)
            return ok, not ok
        ok = self.add_package(package_id)
        return ok, ok

    def is_product_in_wishlist(self, product_id: str) -> bool:
        if self.state.items:
            return self.state.contains_product(product_id)
        try:
            return self.repository.contains_product(product_id)
        except RemoteAPIError as exc:
            self.logger.warning("Wishlist lookup failed", product_id=product_id, error=str(exc))
            return False

    def is_package_in_wishlist(self, package_id: str) -> bool:
        if self.state.items:
            return self.state.contains_package(package_id)
        try:
            return self.repository.contains_package(package_id)
        except RemoteAPIError as exc:
            self.logger.warning("Wishlist lookup failed", package_id=package_id, error=str(exc))
            return False

    def sync_guest(self) -> bool:
        items = merge_wishlist_items(self.guest_storage.get_wishlist(), self.state.items)
        if not items:
            return False
        self.logger.info("Syncing guest wishlist", items=len(items))
        try:
            self.repository.sync_guest(items)
        except RemoteAPIError as exc:
            self.logger.warning(
                "Guest wishlist sync failed", status=exc.status_code, error=str(exc)
            )
            return False
        self.guest_storage.clear_wishlist()
        self.load_wishlist()
        return True
