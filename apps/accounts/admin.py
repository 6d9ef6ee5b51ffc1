"""
Admin configuration for accounts app.

Users are provisioned here: only emails present in this table can sign in
through the identity provider.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _
from django.utils.html import format_html

from .forms import ProvisionUserForm
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Custom User admin with email authentication and role management.
    """

    # List display
    list_display = (
        'email', 'full_name_display', 'role_display', 'timezone',
        'notifications_display', 'is_active_display', 'created_at'
    )
    list_filter = ('role', 'is_active', 'is_staff', 'email_notifications', 'timezone')
    search_fields = ('email', 'first_name', 'last_name')
    ordering = ('first_name', 'last_name')
    list_per_page = 25

    # Fieldsets for edit view
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Personal Info'), {'fields': ('first_name', 'last_name', 'role')}),
        (_('Reminders'), {
            'fields': ('timezone', 'email_notifications', 'reminder_midday', 'reminder_eod'),
        }),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Important dates'), {
            'fields': ('last_login', 'created_at', 'updated_at'),
        }),
    )

    # Fieldsets for add view. Provider-authenticated users need no password.
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'role', 'timezone'),
        }),
    )

    add_form = ProvisionUserForm

    readonly_fields = ('created_at', 'updated_at', 'last_login')

    actions = ['enable_notifications', 'disable_notifications', 'deactivate_users', 'activate_users']

    # Custom display methods
    def full_name_display(self, obj):
        """Display full name."""
        return obj.get_full_name() or '-'
    full_name_display.short_description = 'Name'
    full_name_display.admin_order_field = 'first_name'

    def role_display(self, obj):
        """Display role with color coding."""
        colors = {
            'admin': '#7C3AED',  # Purple
            'user': '#059669',   # Green
        }
        color = colors.get(obj.role, '#6B7280')
        return format_html(
            '<span style="background-color: {}; color: white; padding: 2px 8px; '
            'border-radius: 4px; font-size: 11px; font-weight: 500;">{}</span>',
            color, obj.get_role_display()
        )
    role_display.short_description = 'Role'
    role_display.admin_order_field = 'role'

    def notifications_display(self, obj):
        """Summarize which reminders the user receives."""
        if not obj.email_notifications:
            return 'Off'
        enabled = [
            label for label, flag in (('Midday', obj.reminder_midday), ('EOD', obj.reminder_eod))
            if flag
        ]
        return ', '.join(enabled) or 'None'
    notifications_display.short_description = 'Reminders'

    def is_active_display(self, obj):
        """Display active status with icon."""
        if obj.is_active:
            return format_html('<span style="color: {};">&#9679;</span> Active', '#059669')
        return format_html('<span style="color: {};">&#9679;</span> Inactive', '#DC2626')
    is_active_display.short_description = 'Status'
    is_active_display.admin_order_field = 'is_active'

    # Admin actions
    def enable_notifications(self, request, queryset):
        """Turn reminder emails on for selected users."""
        count = queryset.update(email_notifications=True)
        self.message_user(request, f'Reminders enabled for {count} user(s).')
    enable_notifications.short_description = 'Enable reminder emails'

    def disable_notifications(self, request, queryset):
        """Turn reminder emails off for selected users."""
        count = queryset.update(email_notifications=False)
        self.message_user(request, f'Reminders disabled for {count} user(s).')
    disable_notifications.short_description = 'Disable reminder emails'

    def deactivate_users(self, request, queryset):
        """Deactivate selected users."""
        count = queryset.update(is_active=False)
        self.message_user(request, f'{count} user(s) deactivated.')
    deactivate_users.short_description = 'Deactivate selected users'

    def activate_users(self, request, queryset):
        """Activate selected users."""
        count = queryset.update(is_active=True)
        self.message_user(request, f'{count} user(s) activated.')
    activate_users.short_description = 'Activate selected users'
