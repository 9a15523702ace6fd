from rest_framework import serializers

from apps.common.currency import format_price


class CategorySerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    name_ar = serializers.CharField(allow_null=True)


class ProductReadSerializer(serializers.Serializer):
    # Matches ProductDTO
    id = serializers.CharField()
    name = serializers.CharField()
    name_ar = serializers.CharField(allow_null=True)
    description = serializers.CharField(allow_null=True)
    description_ar = serializers.CharField(allow_null=True)
    price = serializers.FloatField()
    price_display = serializers.SerializerMethodField()
    image_url = serializers.CharField(allow_null=True)
    image_urls = serializers.ListField(child=serializers.CharField())
    stock = serializers.IntegerField(allow_null=True)
    category = CategorySerializer(allow_null=True)

    def get_price_display(self, instance) -> str:
        return format_price(instance.price)


class PackageReadSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_null=True)
    price = serializers.FloatField()
    price_display = serializers.SerializerMethodField()
    image_url = serializers.CharField(allow_null=True)
    products_count = serializers.IntegerField()

    def get_price_display(self, instance) -> str:
        return format_price(instance.price)


class CommentSerializer(serializers.Serializer):
    id = serializers.CharField()
    comment = serializers.CharField()
    created_at = serializers.CharField()
    rating = serializers.IntegerField()
    user_id = serializers.CharField(allow_null=True)
    user_name = serializers.CharField(allow_null=True)


class CommentCreateSerializer(serializers.Serializer):
    comment = serializers.CharField(max_length=2000)
    rating = serializers.IntegerField(min_value=1, max_value=5, default=5)


class UserRatingSerializer(serializers.Serializer):
    user_id = serializers.CharField()
    rating = serializers.IntegerField()


class RatingSerializer(serializers.Serializer):
    average_rating = serializers.FloatField()
    total_ratings = serializers.IntegerField()
    user_rating = UserRatingSerializer(allow_null=True)
