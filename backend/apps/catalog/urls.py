from django.urls import path

from .views import (
    CategoryListView,
    PackageCommentListView,
    PackageListView,
    PackageRatingView,
    ProductCommentListView,
    ProductDetailView,
    ProductListView,
    ProductRatingView,
)

urlpatterns = [
    path("products/", ProductListView.as_view(), name="api-products-list"),
    path("products/<str:product_id>/", ProductDetailView.as_view(), name="api-products-detail"),
    path(
        "products/<str:item_id>/comments/",
        ProductCommentListView.as_view(),
        name="api-products-comments",
    ),
    path("products/<str:item_id>/rating/", ProductRatingView.as_view(), name="api-products-rating"),
    path("packages/", PackageListView.as_view(), name="api-packages-list"),
    path(
        "packages/<str:item_id>/comments/",
        PackageCommentListView.as_view(),
        name="api-packages-comments",
    ),
    path("packages/<str:item_id>/rating/", PackageRatingView.as_view(), name="api-packages-rating"),
    path("categories/", CategoryListView.as_view(), name="api-categories-list"),
]
