# ==========================================
# apps/catalog/admin.py
# ==========================================

from django.contrib import admin
from .models import Country, Plantation, FlowerType, Product


@admin.register(Country)
class CountryAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'flag']
    search_fields = ['code', 'name']


@admin.register(Plantation)
class PlantationAdmin(admin.ModelAdmin):
    list_display = ['name', 'country']
    list_filter = ['country']
    search_fields = ['name']


@admin.register(FlowerType)
class FlowerTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'category']
    list_filter = ['category']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """
    Catalog maintenance screen.

    Prices are edited here; orders keep their own price snapshot so later
    edits never change settled orders.
    """

    list_display = [
        'name',
        'variety',
        'flower_type',
        'country',
        'price_uah',
        'price_usd',
        'status',
        'catalog_type',
        'is_promo',
    ]
    list_filter = ['catalog_type', 'status', 'is_promo', 'country', 'flower_type']
    search_fields = ['name', 'variety', 'color']
    list_select_related = ['flower_type', 'country']
    readonly_fields = ['created_at']

    fieldsets = (
        ('Product', {
            'fields': ('name', 'variety', 'flower_type', 'flower_class', 'color', 'height_cm')
        }),
        ('Origin', {
            'fields': ('country', 'plantation')
        }),
        ('Pricing', {
            'fields': ('price_uah', 'price_usd', 'pack_size', 'is_promo')
        }),
        ('Availability', {
            'fields': ('catalog_type', 'status', 'expected_date', 'created_at')
        }),
    )
