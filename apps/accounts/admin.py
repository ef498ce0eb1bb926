from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['username', 'display_name', 'is_active', 'is_staff', 'last_login']
    list_filter = ['is_active', 'is_staff']
    search_fields = ['username', 'display_name']
    ordering = ['username']

    fieldsets = (
        (None, {'fields': ('username', 'display_name', 'password')}),
        ('Access', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Timestamps', {'fields': ('created_at', 'last_login')}),
    )
    readonly_fields = ['created_at', 'last_login']

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'display_name', 'is_staff', 'password1', 'password2'),
        }),
    )
