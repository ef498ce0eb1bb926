from decimal import Decimal
from rest_framework import serializers
from .models import Customer, CustomerType, Language
from .services import get_next_order_discount, is_discount_eligible, is_gift_eligible


class CustomerFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for customer listing.

    Query Parameters:
        search (str): Match name, shop name, phone or city
        customer_type (str): Filter by customer type
        is_blocked (bool): Filter by blocked flag
    """

    search = serializers.CharField(required=False, allow_blank=True)
    customer_type = serializers.ChoiceField(choices=CustomerType.choices, required=False)
    is_blocked = serializers.BooleanField(required=False, allow_null=True, default=None)


class CustomerCreateInputSerializer(serializers.Serializer):
    """
    Validate input for registering a customer on first contact.

    A known ``telegram_id`` returns the existing customer instead.
    """

    name = serializers.CharField(max_length=200)
    telegram_id = serializers.CharField(max_length=64, required=False, allow_null=True, default=None)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default='')
    shop_name = serializers.CharField(max_length=200, required=False, allow_blank=True, default='')
    city = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    customer_type = serializers.ChoiceField(
        choices=CustomerType.choices, required=False, default=CustomerType.FLOWER_SHOP
    )
    language = serializers.ChoiceField(choices=Language.choices, required=False, default=Language.UA)


class CustomerBlockInputSerializer(serializers.Serializer):
    is_blocked = serializers.BooleanField()


class CustomerSerializer(serializers.ModelSerializer):
    """
    Customer with loyalty counters and eligibility flags.

    Expects ``store_config`` in the serializer context; flags are computed
    from it so one list request loads settings once.
    """

    discount_eligible = serializers.SerializerMethodField()
    next_order_discount = serializers.SerializerMethodField()
    gift_eligible = serializers.SerializerMethodField()

    class Meta:
        model = Customer
        fields = [
            'id',
            'telegram_id',
            'name',
            'phone',
            'shop_name',
            'city',
            'customer_type',
            'language',
            'loyalty_points',
            'total_orders',
            'total_spent',
            'is_blocked',
            'discount_eligible',
            'next_order_discount',
            'gift_eligible',
            'created_at',
        ]
        read_only_fields = fields

    def _config(self):
        return self.context['store_config']

    def get_discount_eligible(self, obj) -> bool:
        return is_discount_eligible(obj, self._config())

    def get_next_order_discount(self, obj) -> Decimal:
        return get_next_order_discount(obj, self._config())

    def get_gift_eligible(self, obj) -> bool:
        return is_gift_eligible(obj, self._config())
