from django.urls import path

from .views import (
    LoginView,
    LogoutView,
    MeView,
    RegisterView,
    SessionLanguageView,
    SessionView,
)

urlpatterns = [
    path("auth/login/", LoginView.as_view(), name="api-auth-login"),
    path("auth/register/", RegisterView.as_view(), name="api-auth-register"),
    path("auth/logout/", LogoutView.as_view(), name="api-auth-logout"),
    path("auth/me/", MeView.as_view(), name="api-auth-me"),
    path("session/", SessionView.as_view(), name="api-session"),
    path("session/language/", SessionLanguageView.as_view(), name="api-session-language"),
]
