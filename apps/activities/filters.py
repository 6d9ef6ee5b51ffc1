"""
Team activity filters using django-filter.

Provides filtering capabilities for the admin review endpoints:
- Developer filter (user id)
- Meeting Type filter (case-insensitive exact match)
- Date Range filter (from date, to date)
- Search (summary, tickets, developer name/email)
"""

import django_filters
from django.db.models import Q

from apps.accounts.models import User
from .models import Activity


class ActivityFilter(django_filters.FilterSet):
    """
    Filter for team activity review (Admin only).

    Usage in views:
        filterset = ActivityFilter(request.GET, queryset=queryset)
        if filterset.is_valid():
            activities = filterset.qs
    """

    developer = django_filters.ModelChoiceFilter(
        field_name='user',
        queryset=User.objects.all(),
        label='Developer',
    )

    meeting_type = django_filters.CharFilter(
        field_name='meeting_type',
        lookup_expr='iexact',
        label='Meeting Type',
    )

    date_from = django_filters.DateFilter(
        field_name='date',
        lookup_expr='gte',
        label='From Date',
    )

    date_to = django_filters.DateFilter(
        field_name='date',
        lookup_expr='lte',
        label='To Date',
    )

    search = django_filters.CharFilter(
        method='filter_search',
        label='Search',
    )

    class Meta:
        model = Activity
        fields = ['developer', 'meeting_type', 'date_from', 'date_to', 'search']

    def filter_search(self, queryset, name, value):
        """
        Search across summary, tickets, and developer name/email.
        Case-insensitive partial matching; every word must match somewhere,
        so "Jane Doe" finds Jane Doe's updates.
        """
        for term in value.split():
            queryset = queryset.filter(
                Q(summary__icontains=term) |
                Q(tickets__icontains=term) |
                Q(meeting_type__icontains=term) |
                Q(user__first_name__icontains=term) |
                Q(user__last_name__icontains=term) |
                Q(user__email__icontains=term)
            )
        return queryset

    @property
    def has_date_range(self):
        """True when the caller supplied an explicit date_from/date_to."""
        return bool(self.data.get('date_from') or self.data.get('date_to'))
