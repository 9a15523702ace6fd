from django.urls import path

from .views import ChangePasswordView, ProfileAvatarView, ProfileView, PublicProfileView

urlpatterns = [
    path("profile/", ProfileView.as_view(), name="api-profile"),
    path("profile/avatar/", ProfileAvatarView.as_view(), name="api-profile-avatar"),
    path("profile/change-password/", ChangePasswordView.as_view(), name="api-profile-change-password"),
    path("users/<str:user_id>/profile/", PublicProfileView.as_view(), name="api-users-profile"),
]
