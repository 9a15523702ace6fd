from rest_framework import serializers

from apps.common.i18n import iter_supported_languages
from apps.users.serializers import AppUserSerializer


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class RegisterRequestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    password_confirmation = serializers.CharField(write_only=True, required=False)
    passwordConfirmation = serializers.CharField(write_only=True, required=False)

    def validate(self, attrs):
        confirmation = attrs.pop("passwordConfirmation", None)
        attrs.setdefault("password_confirmation", confirmation)
        if attrs["password_confirmation"] != attrs["password"]:
            raise serializers.ValidationError(
                {"password_confirmation": ["Passwords do not match."]}
            )
        return attrs


class AuthResponseSerializer(serializers.Serializer):
    access_token = serializers.CharField(source="token")
    token_type = serializers.SerializerMethodField()
    user = AppUserSerializer()
    cart_synced = serializers.BooleanField()
    wishlist_synced = serializers.BooleanField()

    def get_token_type(self, obj) -> str:
        return "Bearer"


class SessionSerializer(serializers.Serializer):
    guest_id = serializers.CharField(help_text="Signed guest id; send it back as X-Guest-Id")
    language = serializers.CharField()
    is_authenticated = serializers.BooleanField()
    user = AppUserSerializer(allow_null=True)


class LanguageSerializer(serializers.Serializer):
    language = serializers.ChoiceField(choices=[])

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["language"].choices = list(iter_supported_languages())


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()
