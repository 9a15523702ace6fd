from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer
from apps.common import get_logger
from .container import build_chat_service
from .serializers import (
    ChatMessageSerializer,
    ChatUserSerializer,
    ConversationSerializer,
    MarkReadSerializer,
    SendMessageSerializer,
)

logger = get_logger(__name__).bind(component="chat", layer="view")

ERRORS = {
    401: OpenApiResponse(response=ErrorResponseSerializer),
    502: OpenApiResponse(response=ErrorResponseSerializer),
}


class ChatAPIView(APIView):
    permission_classes = [IsAuthenticated]
    service_factory = staticmethod(build_chat_service)


@extend_schema(tags=["Chat"])
class ConversationListView(ChatAPIView):
    @extend_schema(summary="List conversations", responses={200: ConversationSerializer(many=True), **ERRORS})
    def get(self, request):
        conversations = self.service_factory(request.storefront).list_conversations()
        return Response(ConversationSerializer(conversations, many=True).data)


@extend_schema(tags=["Chat"])
class AdminListView(ChatAPIView):
    @extend_schema(summary="Admins available for support chat", responses={200: ChatUserSerializer(many=True), **ERRORS})
    def get(self, request):
        admins = self.service_factory(request.storefront).list_admins()
        return Response(ChatUserSerializer(admins, many=True).data)


@extend_schema(tags=["Chat"])
class MessageThreadView(ChatAPIView):
    """GET reads the thread with user ``pk``; DELETE removes message ``pk``."""

    log = logger.bind(view="MessageThreadView")

    @extend_schema(
        summary="Messages with one user",
        description="Also marks the thread read (best effort).",
        parameters=[OpenApiParameter("pk", str, OpenApiParameter.PATH, description="Other user id")],
        responses={200: ChatMessageSerializer(many=True), **ERRORS},
    )
    def get(self, request, pk: str):
        messages = self.service_factory(request.storefront).list_messages(pk)
        return Response(ChatMessageSerializer(messages, many=True).data)

    @extend_schema(
        summary="Delete a message",
        parameters=[OpenApiParameter("pk", str, OpenApiParameter.PATH, description="Message id")],
        responses={204: None, 403: OpenApiResponse(response=ErrorResponseSerializer), **ERRORS},
    )
    def delete(self, request, pk: str):
        self.service_factory(request.storefront).delete_message(pk)
        self.log.info("Chat message deleted", message_id=pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Chat"])
class SendMessageView(ChatAPIView):
    log = logger.bind(view="SendMessageView")

    @extend_schema(
        summary="Send a message",
        request=SendMessageSerializer,
        responses={201: ChatMessageSerializer, 400: OpenApiResponse(response=ErrorResponseSerializer), **ERRORS},
    )
    def post(self, request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        sent = self.service_factory(request.storefront).send_message(
            data["to_user_id"], data["message"], data.get("image_url")
        )
        self.log.info("Chat message sent", to_user_id=data["to_user_id"])
        if sent is None:
            return Response(status=status.HTTP_201_CREATED)
        return Response(ChatMessageSerializer(sent).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Chat"])
class MarkReadView(ChatAPIView):
    @extend_schema(
        summary="Mark a thread read",
        request=None,
        parameters=[OpenApiParameter("user_id", str, OpenApiParameter.PATH)],
        responses={200: MarkReadSerializer},
    )
    def post(self, request, user_id: str):
        marked = self.service_factory(request.storefront).mark_read(user_id)
        return Response({"marked": marked})

