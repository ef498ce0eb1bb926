# ==========================================
# apps/orders/admin.py
# ==========================================

from django.contrib import admin, messages
from django.utils.html import format_html
from apps.common.exceptions import DomainError
from .models import Order, OrderItem, OrderStatus
from .services import transition_order_status


class OrderItemInline(admin.TabularInline):
    """Read-only order lines; prices are frozen at order time."""
    model = OrderItem
    extra = 0
    fields = ['product', 'quantity', 'price_uah', 'total_uah']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin interface for orders.

    Orders are created by the settlement service and change status only
    through the status machine, so every field is read-only here and status
    changes are offered as actions.
    """

    list_display = ['order_number', 'customer', 'status_badge', 'total_uah', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['order_number', 'customer__name', 'customer__shop_name', 'customer__phone']
    readonly_fields = [
        'order_number',
        'customer',
        'status',
        'total_uah',
        'comment',
        'idempotency_key',
        'created_at',
        'updated_at',
    ]
    inlines = [OrderItemInline]

    actions = [
        'mark_confirmed',
        'mark_processing',
        'mark_shipped',
        'mark_completed',
        'mark_cancelled',
    ]

    def status_badge(self, obj):
        """Display order status as colored badge."""
        colors = {
            OrderStatus.NEW: ('#E5C49A', '#2C1810'),
            OrderStatus.CONFIRMED: ('#9AB8E5', '#10202C'),
            OrderStatus.PROCESSING: ('#A47449', 'white'),
            OrderStatus.SHIPPED: ('#5E7E8E', 'white'),
            OrderStatus.COMPLETED: ('#6B8E5E', 'white'),
            OrderStatus.CANCELLED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def _transition(self, request, queryset, new_status):
        changed = 0
        for order in queryset:
            try:
                transition_order_status(order_id=order.id, new_status=new_status)
                changed += 1
            except DomainError as e:
                self.message_user(request, f'{order.order_number}: {e}', level=messages.WARNING)
        self.message_user(request, f'Updated {changed} order(s) to {new_status}.')

    @admin.action(description='Confirm selected orders')
    def mark_confirmed(self, request, queryset):
        self._transition(request, queryset, OrderStatus.CONFIRMED)

    @admin.action(description='Move selected orders to processing')
    def mark_processing(self, request, queryset):
        self._transition(request, queryset, OrderStatus.PROCESSING)

    @admin.action(description='Mark selected orders as shipped')
    def mark_shipped(self, request, queryset):
        self._transition(request, queryset, OrderStatus.SHIPPED)

    @admin.action(description='Complete selected orders')
    def mark_completed(self, request, queryset):
        self._transition(request, queryset, OrderStatus.COMPLETED)

    @admin.action(description='Cancel selected orders (reverses loyalty)')
    def mark_cancelled(self, request, queryset):
        self._transition(request, queryset, OrderStatus.CANCELLED)

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('customer')
