# ==========================================
# apps/customers/admin.py
# ==========================================

from django.contrib import admin
from .models import Customer, LedgerEntry


class LedgerEntryInline(admin.TabularInline):
    model = LedgerEntry
    extra = 0
    fields = ['order', 'order_amount', 'loyalty_points', 'applied_at', 'reversed_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """
    Admin interface for customers.

    Loyalty counters are maintained by the ledger and shown read-only.
    """

    list_display = [
        'name',
        'shop_name',
        'phone',
        'city',
        'customer_type',
        'total_orders',
        'total_spent',
        'loyalty_points',
        'is_blocked',
    ]
    list_filter = ['customer_type', 'language', 'is_blocked']
    search_fields = ['name', 'shop_name', 'phone', 'city', 'telegram_id']
    readonly_fields = ['loyalty_points', 'total_orders', 'total_spent', 'created_at']
    inlines = [LedgerEntryInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'shop_name', 'phone', 'city', 'customer_type', 'language', 'telegram_id')
        }),
        ('Loyalty', {
            'fields': ('loyalty_points', 'total_orders', 'total_spent'),
        }),
        ('Status', {
            'fields': ('is_blocked', 'created_at'),
        }),
    )

    actions = ['block_customers', 'unblock_customers']

    @admin.action(description='Block selected customers')
    def block_customers(self, request, queryset):
        count = queryset.update(is_blocked=True)
        self.message_user(request, f'Blocked {count} customer(s).')

    @admin.action(description='Unblock selected customers')
    def unblock_customers(self, request, queryset):
        count = queryset.update(is_blocked=False)
        self.message_user(request, f'Unblocked {count} customer(s).')
