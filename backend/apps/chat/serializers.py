from rest_framework import serializers


class ChatUserSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    email = serializers.CharField(allow_null=True)
    avatar_url = serializers.CharField(allow_null=True)
    role = serializers.CharField(allow_null=True)
    is_online = serializers.BooleanField()


class ChatMessageSerializer(serializers.Serializer):
    id = serializers.CharField()
    message = serializers.CharField(allow_blank=True)
    user_id = serializers.CharField(allow_null=True)
    to_user_id = serializers.CharField(allow_null=True)
    timestamp = serializers.DateTimeField()
    image_url = serializers.CharField(allow_null=True)
    is_read = serializers.BooleanField()
    order_id = serializers.CharField(allow_null=True)
    sender = ChatUserSerializer(allow_null=True)


class ConversationSerializer(serializers.Serializer):
    id = serializers.CharField()
    user = ChatUserSerializer()
    last_message = ChatMessageSerializer(allow_null=True)
    unread_count = serializers.IntegerField()
    order_id = serializers.CharField(allow_null=True)


class SendMessageSerializer(serializers.Serializer):
    to_user_id = serializers.CharField()
    message = serializers.CharField(allow_blank=True, required=False, default="")
    image_url = serializers.URLField(required=False, allow_null=True, allow_blank=True)

    def validate(self, attrs):
        if not attrs.get("message", "").strip() and not attrs.get("image_url"):
            raise serializers.ValidationError("A message or an image is required.")
        return attrs


class MarkReadSerializer(serializers.Serializer):
    marked = serializers.BooleanField()
