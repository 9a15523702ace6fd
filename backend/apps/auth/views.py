from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.middleware import sign_guest_id
from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from apps.users.serializers import AppUserSerializer
from .container import build_auth_service
from .serializers import (
    AuthResponseSerializer,
    DetailResponseSerializer,
    LanguageSerializer,
    LoginRequestSerializer,
    RegisterRequestSerializer,
    SessionSerializer,
)

logger = get_logger(__name__).bind(component="auth", layer="view")

AUTH_ERRORS = {
    400: OpenApiResponse(response=ErrorResponseSerializer),
    401: OpenApiResponse(response=ErrorResponseSerializer),
    422: OpenApiResponse(response=ErrorResponseSerializer),
    502: OpenApiResponse(response=ErrorResponseSerializer),
}


def _session_payload(session, user):
    return {
        "guest_id": sign_guest_id(session.guest_id),
        "language": session.config.language,
        "is_authenticated": session.is_authenticated,
        "user": user,
    }


@extend_schema(tags=["Auth"])
class LoginView(APIView):
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_auth_service)
    log = logger.bind(view="LoginView")

    @extend_schema(
        summary="Login",
        description="Exchanges credentials for a bearer token and merges the guest cart and wishlist.",
        request=LoginRequestSerializer,
        responses={200: AuthResponseSerializer, **AUTH_ERRORS},
    )
    def post(self, request):
        serializer = LoginRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.service_factory(request.storefront).login(dict(serializer.validated_data))
        self.log.info("Login succeeded", user_id=result.user.id)
        return Response(AuthResponseSerializer(result).data)


@extend_schema(tags=["Auth"])
class RegisterView(APIView):
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_auth_service)
    log = logger.bind(view="RegisterView")

    @extend_schema(
        summary="Register customer",
        request=RegisterRequestSerializer,
        responses={201: AuthResponseSerializer, **AUTH_ERRORS},
    )
    def post(self, request):
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.service_factory(request.storefront).register(dict(serializer.validated_data))
        self.log.info("Registration completed", user_id=result.user.id)
        return Response(AuthResponseSerializer(result).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Auth"])
class LogoutView(APIView):
    permission_classes = [IsAuthenticated]
    service_factory = staticmethod(build_auth_service)

    @extend_schema(summary="Logout", request=None, responses={200: DetailResponseSerializer})
    def post(self, request):
        self.service_factory(request.storefront).logout()
        return Response({"detail": "Logged out"})


@extend_schema(tags=["Auth"])
class MeView(APIView):
    permission_classes = [IsAuthenticated]
    service_factory = staticmethod(build_auth_service)
    log = logger.bind(view="MeView")

    @extend_schema(
        summary="Get current user",
        responses={200: AppUserSerializer, 403: OpenApiResponse(response=ErrorResponseSerializer), **AUTH_ERRORS},
    )
    def get(self, request):
        user = self.service_factory(request.storefront).fetch_user()
        self.log.debug("Returning current user", user_id=user.id)
        return Response(AppUserSerializer(user).data)


@extend_schema(tags=["Session"])
class SessionView(APIView):
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_auth_service)

    @extend_schema(summary="Current storefront session", responses={200: SessionSerializer})
    def get(self, request):
        session = request.storefront
        user = self.service_factory(session).initialize_session()
        return Response(SessionSerializer(_session_payload(session, user)).data)


@extend_schema(tags=["Session"])
class SessionLanguageView(APIView):
    permission_classes = [AllowAny]
    service_factory = staticmethod(build_auth_service)
    log = logger.bind(view="SessionLanguageView")

    @extend_schema(
        summary="Change the session language",
        request=LanguageSerializer,
        responses={200: SessionSerializer, 400: OpenApiResponse(response=ErrorResponseSerializer)},
    )
    def put(self, request):
        serializer = LanguageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = request.storefront
        session.config.set_language(serializer.validated_data["language"])
        self.log.info("Language changed", language=session.config.language)
        user = self.service_factory(session).current_user
        return Response(SessionSerializer(_session_payload(session, user)).data)
