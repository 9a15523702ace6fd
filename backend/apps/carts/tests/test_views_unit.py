import unittest
from unittest.mock import Mock, patch

from rest_framework.test import APIRequestFactory

from apps.carts.dtos import CartItemDTO, CartState
from apps.carts.views import (
    CartCountView,
    CartItemView,
    CartProductsView,
    CartSyncGuestView,
    CartView,
)
from apps.catalog.dtos import ProductDTO
from apps.remote.exceptions import RemoteAPIError
from apps.remote.tests.fakes import make_session


def make_state():
    product = ProductDTO(id="3", name="Pen", price=1.5)
    return CartState(items=[CartItemDTO(id="1", quantity=2, product_id="3", product=product)])


class CartViewsUnitTests(unittest.TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.store = Mock()
        self.store.state = make_state()
        self.store.load_cart.return_value = self.store.state

    def dispatch(self, request, view_cls, **kwargs):
        request.storefront, _ = make_session()
        with patch.object(view_cls, "store_factory", Mock(return_value=self.store)):
            return view_cls.as_view()(request, **kwargs)

    def test_get_cart(self):
        response = self.dispatch(self.factory.get("/api/cart/"), CartView)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["total_quantity"], 2)
        self.assertEqual(response.data["subtotal_display"], "3.00 JD")
        self.assertEqual(response.data["items"][0]["line_total"], 3.0)

    def test_add_product(self):
        self.store.add_product.return_value = True
        request = self.factory.post("/api/cart/products/", {"product_id": "3", "quantity": 2}, format="json")
        response = self.dispatch(request, CartProductsView)
        self.assertEqual(response.status_code, 201)
        self.store.add_product.assert_called_once_with("3", 2)

    def test_add_product_rejects_zero_quantity(self):
        request = self.factory.post("/api/cart/products/", {"product_id": "3", "quantity": 0}, format="json")
        response = self.dispatch(request, CartProductsView)
        self.assertEqual(response.status_code, 400)
        self.store.add_product.assert_not_called()

    def test_backend_rejection_is_surfaced(self):
        self.store.add_product.return_value = False
        self.store.last_error = RemoteAPIError(
            "Out of stock", status_code=422, errors={"quantity": ["too many"]}
        )
        request = self.factory.post("/api/cart/products/", {"product_id": "3"}, format="json")
        response = self.dispatch(request, CartProductsView)
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.data["error"]["message"], "Out of stock")
        self.assertEqual(response.data["error"]["details"], {"quantity": ["too many"]})

    def test_update_and_delete_item(self):
        self.store.update_quantity.return_value = True
        self.store.remove_item.return_value = True
        put = self.factory.put("/api/cart/items/1/", {"quantity": 4}, format="json")
        self.assertEqual(self.dispatch(put, CartItemView, item_id="1").status_code, 200)
        self.store.update_quantity.assert_called_once_with("1", 4)
        delete = self.factory.delete("/api/cart/items/1/")
        self.assertEqual(self.dispatch(delete, CartItemView, item_id="1").status_code, 200)
        self.store.remove_item.assert_called_once_with("1")

    def test_sync_guest(self):
        self.store.sync_guest.return_value = False
        response = self.dispatch(self.factory.post("/api/cart/sync-guest/"), CartSyncGuestView)
        self.assertFalse(response.data["synced"])
        self.store.load_cart.assert_called_once()

    def test_count(self):
        response = self.dispatch(self.factory.get("/api/cart/count/"), CartCountView)
        self.assertEqual(response.data, {"count": 2, "item_count": 1})
