from django.urls import path, include

urlpatterns = [
    # Catalog (products, packages, categories, comments, ratings)
    path("", include("apps.catalog.urls")),
    path("cart/", include("apps.carts.urls")),
    path("wishlist/", include("apps.wishlist.urls")),
    # Orders, checkout summary and fees
    path("", include("apps.orders.urls")),
    # Login/register/logout/me plus session and language
    path("", include("apps.auth.urls")),
    # Profile and public user profiles
    path("", include("apps.users.urls")),
    path("chat/", include("apps.chat.urls")),
]
