from rest_framework import serializers

from apps.common.currency import format_price

CREDIT_CARD = "credit_card"


class OrderItemSerializer(serializers.Serializer):
    id = serializers.CharField()
    qty = serializers.IntegerField()
    price_at_order = serializers.FloatField()
    product_id = serializers.CharField(allow_null=True)
    package_id = serializers.CharField(allow_null=True)
    product_name = serializers.CharField(allow_null=True)
    package_name = serializers.CharField(allow_null=True)
    image_url = serializers.CharField(allow_null=True)


class OrderReadSerializer(serializers.Serializer):
    id = serializers.CharField()
    created_at = serializers.DateTimeField()
    status = serializers.CharField()
    total_price = serializers.FloatField()
    total_price_display = serializers.SerializerMethodField()
    payment_method = serializers.CharField(allow_null=True)
    items = OrderItemSerializer(many=True)

    def get_total_price_display(self, order) -> str:
        return format_price(order.total_price)


class CardDetailsSerializer(serializers.Serializer):
    cardNumber = serializers.CharField()
    expiryDate = serializers.CharField()
    cvv = serializers.CharField(min_length=3, max_length=4)


class PlaceOrderSerializer(serializers.Serializer):
    customer_name = serializers.CharField(max_length=255)
    customer_email = serializers.EmailField()
    customer_phone = serializers.CharField(max_length=32)
    delivery_location = serializers.CharField()
    fee_location = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    payment_method = serializers.CharField()
    card_details = CardDetailsSerializer(required=False, allow_null=True)

    def validate(self, attrs):
        if attrs.get("payment_method") != CREDIT_CARD:
            attrs["card_details"] = None
        elif not attrs.get("card_details"):
            raise serializers.ValidationError(
                {"card_details": ["Please fill in all credit card details"]}
            )
        return attrs


class PlacedOrderSerializer(serializers.Serializer):
    order = OrderReadSerializer(allow_null=True)
    payment_url = serializers.CharField(allow_null=True)
    message = serializers.CharField(allow_null=True)


class DeliveryFeeSerializer(serializers.Serializer):
    id = serializers.CharField()
    location = serializers.CharField()
    fee = serializers.FloatField()
    fee_display = serializers.SerializerMethodField()
    is_active = serializers.BooleanField()

    def get_fee_display(self, obj) -> str:
        return format_price(obj.fee)


class ServiceFeeSerializer(serializers.Serializer):
    fee = serializers.FloatField()
    fee_display = serializers.SerializerMethodField()

    def get_fee_display(self, obj) -> str:
        return format_price(obj["fee"])


class CheckoutSummarySerializer(serializers.Serializer):
    subtotal = serializers.FloatField()
    service_fee = serializers.FloatField()
    location_fee = serializers.FloatField()
    total = serializers.FloatField()
    fee_location = serializers.CharField(allow_null=True)
    item_count = serializers.IntegerField()
    subtotal_display = serializers.SerializerMethodField()
    service_fee_display = serializers.SerializerMethodField()
    location_fee_display = serializers.SerializerMethodField()
    total_display = serializers.SerializerMethodField()

    def get_subtotal_display(self, obj) -> str:
        return format_price(obj.subtotal)

    def get_service_fee_display(self, obj) -> str:
        return format_price(obj.service_fee)

    def get_location_fee_display(self, obj) -> str:
        return format_price(obj.location_fee)

    def get_total_display(self, obj) -> str:
        return format_price(obj.total)
