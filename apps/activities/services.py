"""
Service layer for activities app.

All business logic for activity operations is centralized here so the JSON
views, the Django admin and the reminder routine share one code path.

Services:
- create_activity: Create an activity for its owner
- update_activity: Full (PUT) or partial (PATCH) edit, owner or admin
- delete_activity: Remove an activity, owner or admin
- get_user_activities: Own (or whole-team, admins) listing
- get_team_queryset / get_team_stats / get_filter_options: Admin review
- group_week: Monday-Friday grouping for the weekly view
- has_submitted_on: Submission check used by reminders
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from .forms import ActivityForm
from .models import Activity
from .permissions import can_delete_activity, can_edit_activity

logger = logging.getLogger(__name__)


# =============================================================================
# Create / Update / Delete
# =============================================================================

def _validated_form(data, instance=None):
    form = ActivityForm(data=data, instance=instance)
    if not form.is_valid():
        raise ValidationError(form.errors.as_data())
    return form


def _current_values(activity):
    return {
        'meeting_type': activity.meeting_type,
        'summary': activity.summary,
        'tickets': activity.tickets,
        'date': activity.date.isoformat(),
    }


def create_activity(user, data, now=None):
    """
    Create an activity owned by `user`.

    Args:
        user: Owner
        data: Decoded JSON body (meeting_type, summary, tickets?, date?)
        now: Reference instant for the default date (defaults to now)

    Returns:
        Created Activity instance

    Raises:
        ValidationError: If required fields are missing or malformed
    """
    form = _validated_form(data)
    activity = form.save(commit=False)
    activity.user = user
    if activity.date is None:
        activity.date = user.local_today(now)
    activity.save()

    logger.info('Activity %s created by %s for %s', activity.pk, user.email, activity.date)
    return activity


def update_activity(activity, user, data, partial=False):
    """
    Edit an activity. Only its owner (or an admin) can edit.

    PUT replaces meeting_type/summary/tickets and keeps the date unless one
    is supplied. PATCH (partial=True) changes only the supplied fields.

    Raises:
        PermissionDenied: If user cannot edit the activity
        ValidationError: If validation fails
    """
    if not can_edit_activity(user, activity):
        raise PermissionDenied("You don't have permission to edit this activity.")

    original_date = activity.date
    if partial:
        data = {**_current_values(activity), **data}
    else:
        data = {'tickets': '', **data}

    with transaction.atomic():
        form = _validated_form(data, instance=activity)
        activity = form.save(commit=False)
        if activity.date is None:
            activity.date = original_date
        activity.save()

    logger.info('Activity %s updated by %s', activity.pk, user.email)
    return activity


def delete_activity(activity, user):
    """
    Delete an activity. Only its owner (or an admin) can delete.

    Raises:
        PermissionDenied: If user cannot delete the activity
    """
    if not can_delete_activity(user, activity):
        raise PermissionDenied("You don't have permission to delete this activity.")

    activity_id = activity.pk
    activity.delete()
    logger.info('Activity %s deleted by %s', activity_id, user.email)


# =============================================================================
# Listings
# =============================================================================

def get_user_activities(user, days=None, limit=None, include_team=False, on_date=None, now=None):
    """
    Recent activities for the dashboard and history views.

    Args:
        user: Requesting user
        days: Look-back window ending on the user's local today
        limit: Maximum rows returned
        include_team: Whole team instead of own rows (admins only; ignored otherwise)
        on_date: Single calendar day; overrides `days`

    Returns:
        QuerySet ordered by date desc, created desc
    """
    days = days or settings.ACTIVITY_DEFAULT_DAYS
    limit = limit or settings.ACTIVITY_DEFAULT_LIMIT

    queryset = Activity.objects.select_related('user')
    if not (include_team and user.can_view_team_activity()):
        queryset = queryset.filter(user=user)

    if on_date:
        queryset = queryset.filter(date=on_date)
    else:
        today = user.local_today(now)
        queryset = queryset.filter(date__gte=today - timedelta(days=days), date__lte=today)

    return queryset.order_by('-date', '-created_at')[:limit]


def get_team_queryset(days=None, today=None):
    """
    All activities, optionally limited to the last `days` days.

    Explicit date_from/date_to filters are applied by ActivityFilter; pass
    days=None in that case.
    """
    queryset = Activity.objects.select_related('user')
    if days is not None:
        today = today or timezone.localdate()
        queryset = queryset.filter(date__gte=today - timedelta(days=days), date__lte=today)
    return queryset.order_by('-date', '-created_at')


def get_team_stats(queryset, today=None):
    """Summary numbers over an (already filtered) activity queryset."""
    today = today or timezone.localdate()
    unordered = queryset.order_by()
    return {
        'total_activities': unordered.count(),
        'active_developers': unordered.values('user').distinct().count(),
        'this_week': unordered.filter(date__gte=today - timedelta(days=7)).count(),
    }


def get_filter_options():
    """Dropdown values for the admin filters."""
    developers = User.objects.filter(activities__isnull=False).distinct().order_by(
        'first_name', 'last_name', 'email'
    )

    meeting_types = list(settings.MEETING_TYPES)
    used = Activity.objects.order_by().values_list('meeting_type', flat=True).distinct()
    known = {m.lower() for m in meeting_types}
    meeting_types += sorted({m for m in used if m.lower() not in known}, key=str.lower)

    return {
        'developers': [
            {'id': u.pk, 'name': u.get_full_name(), 'email': u.email} for u in developers
        ],
        'meeting_types': meeting_types,
    }


def serialize_team_activity(activity):
    """Row shape for the admin table."""
    return {
        'id': activity.pk,
        'user_id': activity.user_id,
        'developer': activity.user.get_full_name(),
        'developer_email': activity.user.email,
        'date': activity.date.isoformat(),
        'meeting_type': activity.meeting_type,
        'summary': activity.summary,
        'tickets': activity.ticket_list,
        'submitted_at': activity.created_at.isoformat(),
    }


# =============================================================================
# Weekly View
# =============================================================================

def week_bounds(week_of):
    """Monday and Friday of the week containing `week_of`."""
    monday = week_of - timedelta(days=week_of.weekday())
    return monday, monday + timedelta(days=4)


def group_week(queryset, week_of):
    """
    Group a week's activities per working day.

    Each day's list is sorted by developer name, then newest submission first.

    Returns:
        tuple: (monday, friday, {date: [Activity, ...]}) with all five days present
    """
    monday, friday = week_bounds(week_of)
    days = {monday + timedelta(days=i): [] for i in range(5)}

    for activity in queryset.filter(date__range=(monday, friday)):
        days[activity.date].append(activity)

    for items in days.values():
        items.sort(key=lambda a: a.created_at, reverse=True)
        items.sort(key=lambda a: a.user.get_full_name().lower())

    return monday, friday, days


# =============================================================================
# Reminders
# =============================================================================

def has_submitted_on(user, day):
    """True if `user` has any activity dated `day`."""
    return Activity.objects.filter(user=user, date=day).exists()
