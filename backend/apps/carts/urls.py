from django.urls import path

from .views import (
    CartCountView,
    CartItemView,
    CartPackagesView,
    CartProductsView,
    CartSyncGuestView,
    CartView,
)

urlpatterns = [
    path("", CartView.as_view(), name="api-cart"),
    path("products/", CartProductsView.as_view(), name="api-cart-products"),
    path("packages/", CartPackagesView.as_view(), name="api-cart-packages"),
    path("items/<str:item_id>/", CartItemView.as_view(), name="api-cart-item"),
    path("sync-guest/", CartSyncGuestView.as_view(), name="api-cart-sync-guest"),
    path("count/", CartCountView.as_view(), name="api-cart-count"),
]
