from rest_framework import serializers
from apps.customers.models import Customer
from .models import MAX_LINE_QUANTITY, Order, OrderItem, OrderStatus


# =============================================================================
# Input Serializers
# =============================================================================

class OrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for order listing.

    Query Parameters:
        status (str): Filter by order status
        customer (UUID): Filter by customer ID
    """

    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    customer = serializers.UUIDField(required=False)


class OrderLineInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_LINE_QUANTITY)


class OrderCreateInputSerializer(serializers.Serializer):
    """
    Validate input for placing an order.

    Fields:
        customer_id (UUID): Ordering customer
        items (list): ``[{product_id, quantity}, ...]``, at least one line
        comment (str): Optional comment
    """

    customer_id = serializers.UUIDField()
    items = OrderLineInputSerializer(many=True, allow_empty=False)
    comment = serializers.CharField(required=False, allow_blank=True, default='')


class OrderStatusInputSerializer(serializers.Serializer):
    # Plain CharField: unknown values are rejected by the status machine
    status = serializers.CharField(max_length=20)


class RecentOrdersQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False, default=5)


# =============================================================================
# Output Serializers
# =============================================================================

class CustomerMinimalSerializer(serializers.ModelSerializer):
    """Minimal customer info for nested serialization."""

    class Meta:
        model = Customer
        fields = ['id', 'name', 'shop_name', 'phone']
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    product_variety = serializers.CharField(source='product.variety', read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id',
            'product',
            'product_name',
            'product_variety',
            'quantity',
            'price_uah',
            'total_uah',
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order lists."""

    customer = CustomerMinimalSerializer(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'customer',
            'status',
            'total_uah',
            'created_at',
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Full order with items."""

    customer = CustomerMinimalSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'order_number',
            'customer',
            'status',
            'total_uah',
            'comment',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields
