from django.urls import path

from .views import (
    AdminListView,
    ConversationListView,
    MarkReadView,
    MessageThreadView,
    SendMessageView,
)

urlpatterns = [
    path("conversations/", ConversationListView.as_view(), name="api-chat-conversations"),
    path("admins/", AdminListView.as_view(), name="api-chat-admins"),
    path("messages/", SendMessageView.as_view(), name="api-chat-send"),
    path("messages/<str:pk>/", MessageThreadView.as_view(), name="api-chat-messages"),
    path("<str:user_id>/read/", MarkReadView.as_view(), name="api-chat-read"),
]
