from __future__ import annotations

from typing import Any, List, Optional

from apps.common import get_logger
from apps.guests.dtos import GuestCartItem
from apps.guests.merge import merge_cart_items
from apps.guests.storage import GuestStorage
from apps.remote.exceptions import RemoteAPIError
from .dtos import CartItemDTO, CartState
from .mappers import CartItemMapper
from .protocols import CartRepositoryProtocol

logger = get_logger(__name__).bind(component="carts", layer="service")


class CartStore:
    """
    Cart state for one storefront session.

    Mutations return ``True``/``False``; a failure leaves the backend's
    message in ``state.error`` and the exception in ``last_error``. While the
    session has no token, successful mutations are mirrored into the guest
    cart so they can be merged into the customer's cart after login.
    """

    def __init__(self, repository: CartRepositoryProtocol, guest_storage: GuestStorage, config):
        self.repository = repository
        self.guest_storage = guest_storage
        self.config = config
        self.state = CartState()
        self.last_error: Optional[RemoteAPIError] = None
        self.logger = logger.bind(service="CartStore", guest_id=config.guest_id)

    @property
    def is_guest(self) -> bool:
        return not self.config.is_authenticated

    def _fail(self, action: str, exc: RemoteAPIError, **context) -> bool:
        self.logger.warning(
            "Cart operation failed",
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
        self.state = CartState(items=CartItemMapper.many_from_raw(raw_items))

    def find_item(self, item_id: str) -> Optional[CartItemDTO]:
        for item in self.state.items:
            if item.id == item_id:
                return item
        return None

    def load_cart(self) -> CartState:
        self.state.is_loading = True
        self.state.error = None
        raw_items = self.repository.fetch_cart()
        self._replace_items(raw_items)
        if raw_items and not self.state.items:
            self.logger.warning("No cart items could be parsed", raw_count=len(raw_items))
        self.logger.debug("Cart loaded", items=self.state.item_count)
        return self.state

    def _apply_add_response(self, response) -> None:
        items = response.get("items")
        if isinstance(items, list):
            self._replace_items(items)
        else:
            self.load_cart()

    def add_product(self, product_id: str, quantity: int = 1) -> bool:
        self.logger.info("Adding product to cart", product_id=product_id, quantity=quantity)
        try:
            response = self.repository.add_product(product_id, quantity)
        except RemoteAPIError as exc:
            return self._fail("add_product", exc, product_id=product_id)
        if self.is_guest:
            self.guest_storage.add_to_cart(
                GuestCartItem(id="", product_id=product_id, quantity=quantity)
            )
        self._apply_add_response(response)
        return True

    def add_package(self, package_id: str, quantity: int = 1) -> bool:
        self.logger.info("Adding package to cart", package_id=package_id, quantity=quantity)
        try:
            response = self.repository.add_package(package_id, quantity)
        except RemoteAPIError as exc:
            return self._fail("add_package", exc, package_id=package_id)
        if self.is_guest:
            # the backend adds one package per call whatever quantity was asked for
            self.guest_storage.add_to_cart(GuestCartItem(id="", package_id=package_id, quantity=1))
        self._apply_add_response(response)
        return True

    def _guest_line_for(self, item: Optional[CartItemDTO]) -> Optional[GuestCartItem]:
        if item is None:
            return None
        return self.guest_storage.find_cart_item(
            product_id=item.product_id, package_id=item.package_id
        )

    def _known_item(self, item_id: str) -> Optional[CartItemDTO]:
        if not self.is_guest:
            return None
        if not self.state.items:
            self.load_cart()
        return self.find_item(item_id)

    def update_quantity(self, item_id: str, quantity: int) -> bool:
        self.logger.info("Updating cart quantity", item_id=item_id, quantity=quantity)
        item = self._known_item(item_id)
        try:
            self.repository.update_quantity(item_id, quantity)
        except RemoteAPIError as exc:
            return self._fail("update_quantity", exc, item_id=item_id)
        guest_line = self._guest_line_for(item)
        if guest_line is not None:
            self.guest_storage.update_cart_item(guest_line.id, quantity)
        self.load_cart()
        return True

    def remove_item(self, item_id: str) -> bool:
        self.logger.info("Removing cart item", item_id=item_id)
        item = self._known_item(item_id)
        try:
            self.repository.remove_item(item_id)
        except RemoteAPIError as exc:
            return self._fail("remove_item", exc, item_id=item_id)
        guest_line = self._guest_line_for(item)
        if guest_line is not None:
            self.guest_storage.remove_from_cart(guest_line.id)
        self.load_cart()
        return True

    def clear(self) -> bool:
        self.logger.info("Clearing cart")
        try:
            self.repository.clear()
        except RemoteAPIError as exc:
            return self._fail("clear", exc)
        if self.is_guest:
            self.guest_storage.clear_cart()
        self.load_cart()
        return True

    def sync_guest(self) -> bool:
        """Push the guest cart into the session's cart; never raises."""
        items = merge_cart_items(self.guest_storage.get_cart(), self.state.items)
        if not items:
            return False
        self.logger.info("Syncing guest cart", items=len(items))
        try:
            self.repository.sync_guest(items)
        except RemoteAPIError as exc:
            self.logger.warning(
                "Guest cart sync failed", status=exc.status_code, error=str(exc)
            )
            return False
        self.guest_storage.clear_cart()
        self.load_cart()
        return True
