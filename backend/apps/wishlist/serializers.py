from rest_framework import serializers

from apps.catalog.serializers import PackageReadSerializer, ProductReadSerializer


class WishlistItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    product_id = serializers.CharField(allow_null=True)
    package_id = serializers.CharField(allow_null=True)
    product = ProductReadSerializer(allow_null=True)
    package = PackageReadSerializer(allow_null=True)


class WishlistStateSerializer(serializers.Serializer):
    items = WishlistItemSerializer(many=True)
    item_count = serializers.IntegerField()
    error = serializers.CharField(allow_null=True)


class WishlistProductAddSerializer(serializers.Serializer):
    product_id = serializers.CharField()


class WishlistPackageAddSerializer(serializers.Serializer):
    package_id = serializers.CharField()


class WishlistMembershipSerializer(serializers.Serializer):
    id = serializers.CharField()
    in_wishlist = serializers.BooleanField()


class WishlistSyncSerializer(serializers.Serializer):
    synced = serializers.BooleanField()
    wishlist = WishlistStateSerializer()
