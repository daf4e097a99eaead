from rest_framework import serializers

from .models import PurchaseOrder, PurchaseOrderLine


class OrderLineSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(read_only=True)
    variant_id = serializers.IntegerField(read_only=True)
    product_name = serializers.CharField(source='variant.product.name', read_only=True)
    color = serializers.CharField(source='variant.color', read_only=True)
    size = serializers.CharField(source='variant.size', read_only=True)

    class Meta:
        model = PurchaseOrderLine
        fields = ['id', 'order_id', 'variant_id', 'product_name', 'color', 'size',
                  'quantity', 'subtotal', 'is_active']


class PurchaseOrderSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    user_email = serializers.EmailField(source='user.email', read_only=True)
    lines = serializers.SerializerMethodField()

    class Meta:
        model = PurchaseOrder
        fields = ['id', 'user_id', 'user_email', 'total', 'purchased_at', 'shipping_address',
                  'lines', 'is_active']

    def get_lines(self, obj):
        lines = [line for line in obj.lines.all() if line.is_active]
        return OrderLineSerializer(lines, many=True).data


class OrderLineInputSerializer(serializers.Serializer):
    variant_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class OrderCreateSerializer(serializers.Serializer):
    shipping_address = serializers.CharField(max_length=255)
    lines = OrderLineInputSerializer(many=True, allow_empty=False)


class OrderUpdateSerializer(serializers.Serializer):
    shipping_address = serializers.CharField(max_length=255)


class AddLineSerializer(serializers.Serializer):
    order_id = serializers.IntegerField(min_value=1)
    variant_id = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)


class LineQuantitySerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
