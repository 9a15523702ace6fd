from django.urls import path

from .views import (
    CheckoutSummaryView,
    DeliveryFeeListView,
    OrderDetailView,
    OrderListView,
    ServiceFeeView,
)

urlpatterns = [
    path("orders/", OrderListView.as_view(), name="api-orders-list"),
    path("orders/<str:order_id>/", OrderDetailView.as_view(), name="api-orders-detail"),
    path("checkout/summary/", CheckoutSummaryView.as_view(), name="api-checkout-summary"),
    path("fees/delivery/", DeliveryFeeListView.as_view(), name="api-fees-delivery"),
    path("fees/service/", ServiceFeeView.as_view(), name="api-fees-service"),
]
