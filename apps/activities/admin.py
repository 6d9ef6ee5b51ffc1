"""
Admin configuration for activities app.
"""

from django.contrib import admin
from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    """Admin for Activity model."""

    list_display = (
        'date', 'user', 'meeting_type', 'summary_preview', 'tickets', 'created_at'
    )
    list_filter = ('meeting_type', 'date', 'user')
    search_fields = (
        'summary', 'tickets', 'meeting_type',
        'user__email', 'user__first_name', 'user__last_name'
    )
    ordering = ('-date', '-created_at')
    date_hierarchy = 'date'
    autocomplete_fields = ('user',)

    readonly_fields = ('created_at', 'updated_at')

    def summary_preview(self, obj):
        """Show truncated summary."""
        return obj.summary[:80] + '...' if len(obj.summary) > 80 else obj.summary
    summary_preview.short_description = 'Summary'

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('user')
