from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole


ROLE_COLORS = {
    UserRole.ADMIN: '#B85C5C',
    UserRole.SK_OFFICIAL: '#2F6DB5',
    UserRole.USER: '#6B8E5E',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for User model.

    Officials are promoted here by changing ``role``.
    """

    list_display = [
        'email',
        'username',
        'display_name',
        'role_badge',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'email',
        'username',
        'display_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    # Remove username-as-login references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'username', 'display_name', 'password')
        }),
        ('Role & Permissions', {
            'fields': ('role', 'is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Password Reset', {
            'fields': ('verification_token',),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'username', 'display_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']

    filter_horizontal = ['groups', 'user_permissions']

    actions = ['make_officials', 'make_regular_users']

    def role_badge(self, obj):
        """Display role as colored badge."""
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            ROLE_COLORS.get(obj.role, '#999'),
            obj.get_role_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    @admin.action(description='Promote selected users to SK official')
    def make_officials(self, request, queryset):
        count = queryset.exclude(role=UserRole.ADMIN).update(role=UserRole.SK_OFFICIAL)
        self.message_user(request, f'Promoted {count} user(s).')

    @admin.action(description='Demote selected users to regular user')
    def make_regular_users(self, request, queryset):
        count = queryset.filter(is_superuser=False).update(role=UserRole.USER)
        self.message_user(request, f'Demoted {count} user(s).')
