from django.urls import path

from .views import (
    WishlistPackagesView,
    WishlistPackageToggleView,
    WishlistPackageView,
    WishlistProductsView,
    WishlistProductToggleView,
    WishlistProductView,
    WishlistSyncGuestView,
    WishlistView,
)

urlpatterns = [
    path("", WishlistView.as_view(), name="api-wishlist"),
    path("products/", WishlistProductsView.as_view(), name="api-wishlist-products"),
    path("packages/", WishlistPackagesView.as_view(), name="api-wishlist-packages"),
    path("products/<str:target_id>/", WishlistProductView.as_view(), name="api-wishlist-product"),
    path("packages/<str:target_id>/", WishlistPackageView.as_view(), name="api-wishlist-package"),
    path(
        "products/<str:target_id>/toggle/",
        WishlistProductToggleView.as_view(),
        name="api-wishlist-product-toggle",
    ),
    path(
        "packages/<str:target_id>/toggle/",
        WishlistPackageToggleView.as_view(),
        name="api-wishlist-package-toggle",
    ),
    path("sync-guest/", WishlistSyncGuestView.as_view(), name="api-wishlist-sync-guest"),
]
