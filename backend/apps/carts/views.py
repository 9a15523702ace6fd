from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.exceptions import remote_error_response
from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_cart_store
from .serializers import (
    CartCountSerializer,
    CartPackageAddSerializer,
    CartProductAddSerializer,
    CartQuantitySerializer,
    CartStateSerializer,
    CartSyncSerializer,
)

logger = get_logger(__name__).bind(component="carts", layer="view")

MUTATION_ERRORS = {
    400: OpenApiResponse(response=ErrorResponseSerializer),
    422: OpenApiResponse(response=ErrorResponseSerializer),
    502: OpenApiResponse(response=ErrorResponseSerializer),
}


def _state_response(store, ok: bool, success_status=status.HTTP_200_OK) -> Response:
    if not ok:
        return remote_error_response(store.last_error)
    return Response(CartStateSerializer(store.state).data, status=success_status)


@extend_schema(tags=["Cart"])
class CartView(APIView):
    store_factory = staticmethod(build_cart_store)
    log = logger.bind(view="CartView")

    @extend_schema(summary="Get cart", responses={200: CartStateSerializer})
    def get(self, request):
        store = self.store_factory(request.storefront)
        state = store.load_cart()
        self.log.debug("Cart fetched", items=state.item_count)
        return Response(CartStateSerializer(state).data)

    @extend_schema(summary="Clear cart", responses={200: CartStateSerializer, **MUTATION_ERRORS})
    def delete(self, request):
        store = self.store_factory(request.storefront)
        return _state_response(store, store.clear())


@extend_schema(tags=["Cart"])
class CartProductsView(APIView):
    store_factory = staticmethod(build_cart_store)
    log = logger.bind(view="CartProductsView")

    @extend_schema(
        summary="Add product to cart",
        request=CartProductAddSerializer,
        responses={201: CartStateSerializer, **MUTATION_ERRORS},
    )
    def post(self, request):
        serializer = CartProductAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        store = self.store_factory(request.storefront)
        ok = store.add_product(data["product_id"], data["quantity"])
        self.log.info("Add product handled", product_id=data["product_id"], ok=ok)
        return _state_response(store, ok, status.HTTP_201_CREATED)


@extend_schema(tags=["Cart"])
class CartPackagesView(APIView):
    store_factory = staticmethod(build_cart_store)
    log = logger.bind(view="CartPackagesView")

    @extend_schema(
        summary="Add package to cart",
        request=CartPackageAddSerializer,
        responses={201: CartStateSerializer, **MUTATION_ERRORS},
    )
    def post(self, request):
        serializer = CartPackageAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        store = self.store_factory(request.storefront)
        ok = store.add_package(data["package_id"], data["quantity"])
        self.log.info("Add package handled", package_id=data["package_id"], ok=ok)
        return _state_response(store, ok, status.HTTP_201_CREATED)


@extend_schema(tags=["Cart"])
class CartItemView(APIView):
    store_factory = staticmethod(build_cart_store)
    log = logger.bind(view="CartItemView")

    @extend_schema(
        summary="Change line quantity",
        parameters=[OpenApiParameter("item_id", str, OpenApiParameter.PATH)],
        request=CartQuantitySerializer,
        responses={200: CartStateSerializer, **MUTATION_ERRORS},
    )
    def put(self, request, item_id: str):
        serializer = CartQuantitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        store = self.store_factory(request.storefront)
        ok = store.update_quantity(item_id, serializer.validated_data["quantity"])
        return _state_response(store, ok)

    @extend_schema(
        summary="Remove line",
        parameters=[OpenApiParameter("item_id", str, OpenApiParameter.PATH)],
        responses={200: CartStateSerializer, **MUTATION_ERRORS},
    )
    def delete(self, request, item_id: str):
        store = self.store_factory(request.storefront)
        return _state_response(store, store.remove_item(item_id))


@extend_schema(tags=["Cart"])
class CartSyncGuestView(APIView):
    store_factory = staticmethod(build_cart_store)
    log = logger.bind(view="CartSyncGuestView")

    @extend_schema(
        summary="Merge the guest cart into the session cart",
        request=None,
        responses={200: CartSyncSerializer},
    )
    def post(self, request):
        store = self.store_factory(request.storefront)
        synced = store.sync_guest()
        if not synced:
            store.load_cart()
        self.log.info("Guest cart sync requested", synced=synced)
        return Response(CartSyncSerializer({"synced": synced, "cart": store.state}).data)


@extend_schema(tags=["Cart"])
class CartCountView(APIView):
    store_factory = staticmethod(build_cart_store)

    @extend_schema(summary="Cart badge count", responses={200: CartCountSerializer})
    def get(self, request):
        state = self.store_factory(request.storefront).load_cart()
        payload = {"count": state.total_quantity, "item_count": state.item_count}
        return Response(CartCountSerializer(payload).data)
