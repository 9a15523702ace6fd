from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.exceptions import remote_error_response
from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_wishlist_store
from .serializers import (
    WishlistMembershipSerializer,
    WishlistPackageAddSerializer,
    WishlistProductAddSerializer,
    WishlistStateSerializer,
    WishlistSyncSerializer,
)

logger = get_logger(__name__).bind(component="wishlist", layer="view")

MUTATION_ERRORS = {
    400: OpenApiResponse(response=ErrorResponseSerializer),
    502: OpenApiResponse(response=ErrorResponseSerializer),
}


def _state_response(store, ok: bool, success_status=status.HTTP_200_OK) -> Response:
    if not ok:
        return remote_error_response(store.last_error)
    return Response(WishlistStateSerializer(store.state).data, status=success_status)


@extend_schema(tags=["Wishlist"])
class WishlistView(APIView):
    store_factory = staticmethod(build_wishlist_store)

    @extend_schema(summary="Get wishlist", responses={200: WishlistStateSerializer})
    def get(self, request):
        state = self.store_factory(request.storefront).load_wishlist()
        return Response(WishlistStateSerializer(state).data)


class WishlistAddView(APIView):
    """POST adds a product or package, depending on ``kind``."""

    kind = "product"
    input_serializer = WishlistProductAddSerializer
    store_factory = staticmethod(build_wishlist_store)
    log = logger.bind(view="WishlistAddView")

    def post(self, request):
        serializer = self.input_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        target_id = serializer.validated_data[f"{self.kind}_id"]
        store = self.store_factory(request.storefront)
        ok = getattr(store, f"add_{self.kind}")(target_id)
        self.log.info("Wishlist add handled", kind=self.kind, target_id=target_id, ok=ok)
        return _state_response(store, ok, status.HTTP_201_CREATED)


@extend_schema(tags=["Wishlist"])
class WishlistProductsView(WishlistAddView):
    kind = "product"
    input_serializer = WishlistProductAddSerializer

    @extend_schema(
        summary="Add product to wishlist",
        request=WishlistProductAddSerializer,
        responses={201: WishlistStateSerializer, **MUTATION_ERRORS},
    )
    def post(self, request):
        return super().post(request)


@extend_schema(tags=["Wishlist"])
class WishlistPackagesView(WishlistAddView):
    kind = "package"
    input_serializer = WishlistPackageAddSerializer

    @extend_schema(
        summary="Add package to wishlist",
        request=WishlistPackageAddSerializer,
        responses={201: WishlistStateSerializer, **MUTATION_ERRORS},
    )
    def post(self, request):
        return super().post(request)


class WishlistEntryView(APIView):
    kind = "product"
    store_factory = staticmethod(build_wishlist_store)

    @extend_schema(summary="Is it in the wishlist", responses={200: WishlistMembershipSerializer})
    def get(self, request, target_id: str):
        store = self.store_factory(request.storefront)
        in_wishlist = getattr(store, f"is_{self.kind}_in_wishlist")(target_id)
        return Response(
            WishlistMembershipSerializer({"id": target_id, "in_wishlist": in_wishlist}).data
        )

    @extend_schema(summary="Remove from wishlist", responses={200: WishlistStateSerializer, **MUTATION_ERRORS})
    def delete(self, request, target_id: str):
        store = self.store_factory(request.storefront)
        return _state_response(store, getattr(store, f"remove_{self.kind}")(target_id))


@extend_schema(tags=["Wishlist"])
class WishlistProductView(WishlistEntryView):
    kind = "product"


@extend_schema(tags=["Wishlist"])
class WishlistPackageView(WishlistEntryView):
    kind = "package"


class WishlistToggleView(APIView):
    kind = "product"
    store_factory = staticmethod(build_wishlist_store)

    @extend_schema(
        summary="Toggle wishlist membership",
        request=None,
        responses={200: WishlistMembershipSerializer, **MUTATION_ERRORS},
    )
    def post(self, request, target_id: str):
        store = self.store_factory(request.storefront)
        ok, in_wishlist = getattr(store, f"toggle_{self.kind}")(target_id)
        if not ok:
            return remote_error_response(store.last_error)
        return Response(
            WishlistMembershipSerializer({"id": target_id, "in_wishlist": in_wishlist}).data
        )


@extend_schema(tags=["Wishlist"])
class WishlistProductToggleView(WishlistToggleView):
    kind = "product"


@extend_schema(tags=["Wishlist"])
class WishlistPackageToggleView(WishlistToggleView):
    kind = "package"


@extend_schema(tags=["Wishlist"])
class WishlistSyncGuestView(APIView):
    store_factory = staticmethod(build_wishlist_store)

    @extend_schema(
        summary="Merge the guest wishlist into the session wishlist",
        request=None,
        responses={200: WishlistSyncSerializer},
    )
    def post(self, request):
        store = self.store_factory(request.storefront)
        synced = store.sync_guest()
        if not synced:
            store.load_wishlist()
        return Response(WishlistSyncSerializer({"synced": synced, "wishlist": store.state}).data)
