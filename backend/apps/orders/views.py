from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .commands import PlaceOrderCommand
from .container import build_checkout_service, build_order_service
from .serializers import (
    CheckoutSummarySerializer,
    DeliveryFeeSerializer,
    OrderReadSerializer,
    PlacedOrderSerializer,
    PlaceOrderSerializer,
    ServiceFeeSerializer,
)
from .services import EmptyCartError

logger = get_logger(__name__).bind(component="orders", layer="view")

ERRORS = {
    401: OpenApiResponse(response=ErrorResponseSerializer),
    502: OpenApiResponse(response=ErrorResponseSerializer),
}


@extend_schema(tags=["Orders"])
class OrderListView(APIView):
    service_factory = staticmethod(build_order_service)
    checkout_factory = staticmethod(build_checkout_service)
    log = logger.bind(view="OrderListView")

    def get_permissions(self):
        # guests may check out; only customers have an order history
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(summary="List my orders", responses={200: OrderReadSerializer(many=True), **ERRORS})
    def get(self, request):
        orders = self.service_factory(request.storefront).list_orders()
        return Response(OrderReadSerializer(orders, many=True).data)

    @extend_schema(
        summary="Place an order from the cart",
        request=PlaceOrderSerializer,
        responses={
            201: PlacedOrderSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            422: OpenApiResponse(response=ErrorResponseSerializer),
            502: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = PlaceOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        command = PlaceOrderCommand.from_raw(dict(serializer.validated_data))
        checkout = self.checkout_factory(request.storefront)
        try:
            placed = checkout.place_order(command)
        except EmptyCartError as exc:
            self.log.info("Checkout attempted with an empty cart")
            return error_response("VALIDATION_ERROR", str(exc), http_status=status.HTTP_400_BAD_REQUEST)
        return Response(PlacedOrderSerializer(placed).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Orders"])
class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    service_factory = staticmethod(build_order_service)
    log = logger.bind(view="OrderDetailView")

    @extend_schema(
        summary="Get order",
        parameters=[OpenApiParameter("order_id", str, OpenApiParameter.PATH)],
        responses={200: OrderReadSerializer, 404: OpenApiResponse(response=ErrorResponseSerializer), **ERRORS},
    )
    def get(self, request, order_id: str):
        order = self.service_factory(request.storefront).get_order(order_id)
        if order is None:
            return error_response("NOT_FOUND", "Order not found", http_status=status.HTTP_404_NOT_FOUND)
        return Response(OrderReadSerializer(order).data)

    @extend_schema(
        summary="Delete order",
        parameters=[OpenApiParameter("order_id", str, OpenApiParameter.PATH)],
        responses={204: None, 404: OpenApiResponse(response=ErrorResponseSerializer), **ERRORS},
    )
    def delete(self, request, order_id: str):
        self.service_factory(request.storefront).delete_order(order_id)
        self.log.info("Order deleted", order_id=order_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Checkout"])
class CheckoutSummaryView(APIView):
    permission_classes = [AllowAny]
    checkout_factory = staticmethod(build_checkout_service)

    @extend_schema(
        summary="Cart totals with fees",
        parameters=[OpenApiParameter("fee_location", str, required=False, description="Delivery city")],
        responses={200: CheckoutSummarySerializer},
    )
    def get(self, request):
        fee_location = request.query_params.get("fee_location") or None
        summary = self.checkout_factory(request.storefront).summary(fee_location)
        return Response(CheckoutSummarySerializer(summary).data)


@extend_schema(tags=["Checkout"])
class DeliveryFeeListView(APIView):
    permission_classes = [AllowAny]
    checkout_factory = staticmethod(build_checkout_service)

    @extend_schema(summary="Delivery fees per city", responses={200: DeliveryFeeSerializer(many=True)})
    def get(self, request):
        fees = self.checkout_factory(request.storefront).delivery_fees()
        return Response(DeliveryFeeSerializer(fees, many=True).data)


@extend_schema(tags=["Checkout"])
class ServiceFeeView(APIView):
    permission_classes = [AllowAny]
    checkout_factory = staticmethod(build_checkout_service)

    @extend_schema(summary="Service fee", responses={200: ServiceFeeSerializer})
    def get(self, request):
        fee = self.checkout_factory(request.storefront).service_fee()
        return Response(ServiceFeeSerializer({"fee": fee}).data)
