from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, OpenApiTypes, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.api.utils import error_response
from apps.common import get_logger
from .container import build_profile_service
from .serializers import (
    AvatarSerializer,
    ChangePasswordSerializer,
    DetailSerializer,
    ProfileUpdateSerializer,
)

logger = get_logger(__name__).bind(component="users", layer="view")

ERRORS = {
    401: OpenApiResponse(response=ErrorResponseSerializer),
    422: OpenApiResponse(response=ErrorResponseSerializer),
    502: OpenApiResponse(response=ErrorResponseSerializer),
}


@extend_schema(tags=["Profile"])
class ProfileView(APIView):
    permission_classes = [IsAuthenticated]
    service_factory = staticmethod(build_profile_service)
    log = logger.bind(view="ProfileView")

    @extend_schema(summary="Get my profile", responses={200: OpenApiTypes.OBJECT, **ERRORS})
    def get(self, request):
        return Response(self.service_factory(request.storefront).fetch_profile())

    @extend_schema(
        summary="Update my profile",
        request=ProfileUpdateSerializer,
        responses={200: OpenApiTypes.OBJECT, 400: OpenApiResponse(response=ErrorResponseSerializer), **ERRORS},
    )
    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = self.service_factory(request.storefront).update_profile(**serializer.validated_data)
        self.log.info("Profile updated", fields=sorted(serializer.validated_data))
        return Response(profile)


@extend_schema(tags=["Profile"])
class ProfileAvatarView(APIView):
    permission_classes = [IsAuthenticated]
    service_factory = staticmethod(build_profile_service)

    @extend_schema(summary="Set avatar url", request=AvatarSerializer, responses={200: DetailSerializer, **ERRORS})
    def post(self, request):
        serializer = AvatarSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.service_factory(request.storefront).update_avatar_url(serializer.validated_data["avatar_url"])
        return Response({"detail": "Avatar updated"})


@extend_schema(tags=["Profile"])
class ChangePasswordView(APIView):
    permission_classes = [IsAuthenticated]
    service_factory = staticmethod(build_profile_service)
    log = logger.bind(view="ChangePasswordView")

    @extend_schema(
        summary="Change password",
        request=ChangePasswordSerializer,
        responses={200: DetailSerializer, 400: OpenApiResponse(response=ErrorResponseSerializer), **ERRORS},
    )
    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        self.service_factory(request.storefront).change_password(data["current_password"], data["password"])
        self.log.info("Password changed")
        return Response({"detail": "Password changed"})


@extend_schema(tags=["Users"])
class PublicProfileView(APIView):
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_profile_service)

    @extend_schema(
        summary="Public profile",
        parameters=[OpenApiParameter("user_id", str, OpenApiParameter.PATH)],
        responses={200: OpenApiTypes.OBJECT, 404: OpenApiResponse(response=ErrorResponseSerializer)},
    )
    def get(self, request, user_id: str):
        profile = self.service_factory(request.storefront).fetch_public_profile(user_id)
        if profile is None:
            return error_response("NOT_FOUND", "User not found", http_status=status.HTTP_404_NOT_FOUND)
        return Response(profile)
