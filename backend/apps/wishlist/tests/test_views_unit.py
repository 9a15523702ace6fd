import unittest
from unittest.mock import Mock, patch

from rest_framework.test import APIRequestFactory

from apps.remote.exceptions import RemoteUnavailableError
from apps.remote.tests.fakes import make_session
from apps.wishlist.dtos import WishlistItemDTO, WishlistState
from apps.wishlist.views import (
    WishlistPackagesView,
    WishlistPackageView,
    WishlistProductToggleView,
    WishlistProductView,
    WishlistView,
)


class WishlistViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.store = Mock()
        self.store.state = WishlistState(items=[WishlistItemDTO(id="1", product_id="3")])
        self.store.load_wishlist.return_value = self.store.state

    def dispatch(self, request, view_cls, **kwargs):
        request.storefront, _ = make_session()
        with patch.object(view_cls, "store_factory", Mock(return_value=self.store)):
            return view_cls.as_view()(request, **kwargs)

    def test_get(self):
        response = self.dispatch(self.factory.get("/api/wishlist/"), WishlistView)
        self.assertEqual(response.data["item_count"], 1)

    def test_add_package(self):
        self.store.add_package.return_value = True
        request = self.factory.post("/api/wishlist/packages/", {"package_id": "4"}, format="json")
        response = self.dispatch(request, WishlistPackagesView)
        self.assertEqual(response.status_code, 201)
        self.store.add_package.assert_called_once_with("4")

    def test_membership(self):
        self.store.is_product_in_wishlist.return_value = True
        response = self.dispatch(
            self.factory.get("/api/wishlist/products/3/"), WishlistProductView, target_id="3"
        )
        self.assertEqual(response.data, {"id": "3", "in_wishlist": True})

    def test_remove_failure_maps_to_bad_gateway(self):
        self.store.remove_package.return_value = False
        self.store.last_error = RemoteUnavailableError("Store backend is unavailable")
        response = self.dispatch(
            self.factory.delete("/api/wishlist/packages/4/"), WishlistPackageView, target_id="4"
        )
        self.assertEqual(response.status_code, 502)

    def test_toggle(self):
        self.store.toggle_product.return_value = (True, False)
        response = self.dispatch(
            self.factory.post("/api/wishlist/products/3/toggle/"), WishlistProductToggleView, target_id="3"
        )
        self.assertEqual(response.data["in_wishlist"], False)
