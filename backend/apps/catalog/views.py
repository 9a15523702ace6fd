from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_catalog_service
from .serializers import (
    CategorySerializer,
    CommentCreateSerializer,
    CommentSerializer,
    PackageReadSerializer,
    ProductReadSerializer,
    RatingSerializer,
)

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Catalog"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_catalog_service)
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Cached per language. ?search filters by name and description.",
        parameters=[
            OpenApiParameter(name="search", type=str, required=False),
            OpenApiParameter(name="category", description="Category id", type=str, required=False),
        ],
        responses={200: ProductReadSerializer(many=True)},
    )
    def get(self, request):
        session = request.storefront
        service = self.service_factory(session)
        search = request.query_params.get("search")
        category = request.query_params.get("category")
        self.log.debug("Handling product list request", search=search, category=category)
        if search:
            products = service.search(search, language=session.config.language)
        else:
            products = service.list_products(language=session.config.language)
        if category:
            products = [p for p in products if p.category and p.category.id == category]
        return Response(ProductReadSerializer(products, many=True).data)


@extend_schema(tags=["Catalog"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_catalog_service)
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", str, OpenApiParameter.PATH)],
        responses={
            200: ProductReadSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            502: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id: str):
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service_factory(request.storefront).get_product(product_id)
        return Response(ProductReadSerializer(dto).data)


@extend_schema(tags=["Catalog"])
class PackageListView(APIView):
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_catalog_service)
    log = logger.bind(view="PackageListView")

    @extend_schema(summary="List packages", responses={200: PackageReadSerializer(many=True)})
    def get(self, request):
        session = request.storefront
        self.log.debug("Listing packages")
        packages = self.service_factory(session).list_packages(language=session.config.language)
        return Response(PackageReadSerializer(packages, many=True).data)


@extend_schema(tags=["Catalog"])
class CategoryListView(APIView):
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_catalog_service)
    log = logger.bind(view="CategoryListView")

    @extend_schema(summary="List categories", responses={200: CategorySerializer(many=True)})
    def get(self, request):
        session = request.storefront
        self.log.debug("Listing categories")
        categories = self.service_factory(session).list_categories(language=session.config.language)
        return Response(CategorySerializer(categories, many=True).data)


class CommentListView(APIView):
    """Comments on a product or a package; posting requires a signed-in customer."""

    kind = "products"
    permission_classes = [IsAuthenticatedOrReadOnly]
    service_factory = staticmethod(build_catalog_service)
    log = logger.bind(view="CommentListView")

    @extend_schema(summary="List comments", responses={200: CommentSerializer(many=True)})
    def get(self, request, item_id: str):
        comments = self.service_factory(request.storefront).list_comments(self.kind, item_id)
        return Response(CommentSerializer(comments, many=True).data)

    @extend_schema(
        summary="Add comment",
        request=CommentCreateSerializer,
        responses={
            201: CommentSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            401: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request, item_id: str):
        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info("Adding comment", kind=self.kind, item_id=item_id)
        dto = self.service_factory(request.storefront).add_comment(
            self.kind,
            item_id,
            serializer.validated_data["comment"],
            serializer.validated_data["rating"],
        )
        return Response(CommentSerializer(dto).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Catalog"])
class ProductCommentListView(CommentListView):
    kind = "products"
    log = logger.bind(view="ProductCommentListView")


@extend_schema(tags=["Catalog"])
class PackageCommentListView(CommentListView):
    kind = "packages"
    log = logger.bind(view="PackageCommentListView")


class RatingView(APIView):
    kind = "products"
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_catalog_service)

    @extend_schema(summary="Rating summary", responses={200: RatingSerializer})
    def get(self, request, item_id: str):
        rating = self.service_factory(request.storefront).get_rating(self.kind, item_id)
        return Response(RatingSerializer(rating).data)


@extend_schema(tags=["Catalog"])
class ProductRatingView(RatingView):
    kind = "products"


@extend_schema(tags=["Catalog"])
class PackageRatingView(RatingView):
    kind = "packages"
