from rest_framework import serializers


class AppUserSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField(allow_blank=True)
    email = serializers.CharField(allow_blank=True)
    role = serializers.CharField(allow_null=True)
    is_blocked = serializers.BooleanField(allow_null=True)
    additional_data = serializers.DictField(allow_null=True)


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, max_length=255)
    email = serializers.EmailField(required=False)
    bio = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    location = serializers.CharField(required=False, allow_blank=True)
    is_private = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide at least one field to update.")
        return attrs


class AvatarSerializer(serializers.Serializer):
    avatar_url = serializers.URLField()


class ChangePasswordSerializer(serializers.Serializer):
    current_password = serializers.CharField(write_only=True)
    password = serializers.CharField(write_only=True, min_length=8)
    password_confirmation = serializers.CharField(write_only=True, required=False)

    def validate(self, attrs):
        confirmation = attrs.get("password_confirmation")
        if confirmation is not None and confirmation != attrs["password"]:
            raise serializers.ValidationError(
                {"password_confirmation": ["Passwords do not match."]}
            )
        return attrs


class DetailSerializer(serializers.Serializer):
    detail = serializers.CharField()
