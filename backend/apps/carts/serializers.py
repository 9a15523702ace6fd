from rest_framework import serializers

from apps.catalog.serializers import PackageReadSerializer, ProductReadSerializer
from apps.common.currency import format_price


class CartItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    quantity = serializers.IntegerField()
    product_id = serializers.CharField(allow_null=True)
    package_id = serializers.CharField(allow_null=True)
    product = ProductReadSerializer(allow_null=True)
    package = PackageReadSerializer(allow_null=True)
    unit_price = serializers.FloatField()
    line_total = serializers.FloatField()


class CartStateSerializer(serializers.Serializer):
    items = CartItemSerializer(many=True)
    item_count = serializers.IntegerField()
    total_quantity = serializers.IntegerField()
    subtotal = serializers.FloatField()
    subtotal_display = serializers.SerializerMethodField()
    error = serializers.CharField(allow_null=True)

    def get_subtotal_display(self, state) -> str:
        return format_price(state.subtotal)


class CartProductAddSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class CartPackageAddSerializer(serializers.Serializer):
    package_id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class CartQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)


class CartCountSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    item_count = serializers.IntegerField()


class CartSyncSerializer(serializers.Serializer):
    synced = serializers.BooleanField()
    cart = CartStateSerializer()
