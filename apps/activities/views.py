"""
Views for activities app.

Includes:
- Own activity listing and creation
- Activity detail, edit and delete (owner or admin)
- Team activity review, export and weekly view (admin only)
"""

import logging

from django.core.exceptions import PermissionDenied, ValidationError
from django.core.paginator import EmptyPage, PageNotAnInteger, Paginator
from django.http import HttpResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods

from apps.accounts.middleware import (
    json_error, json_success, load_json_body, validation_error_response,
)
from apps.accounts.permissions import api_admin_required, api_login_required
from .exports import XLSX_CONTENT_TYPE, build_workbook, export_filename, workbook_bytes
from .filters import ActivityFilter
from .forms import ActivityQueryForm, TeamActivityQueryForm, WeekQueryForm
from .models import Activity
from .permissions import can_view_activity
from .services import (
    create_activity, delete_activity, get_filter_options, get_team_queryset,
    get_team_stats, get_user_activities, group_week, serialize_team_activity,
    update_activity,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def _query_error(form):
    return validation_error_response(ValidationError(form.errors.as_data()))


def _filtered_team_queryset(request):
    """
    Apply the admin query parameters and ActivityFilter.

    Returns:
        tuple: (queryset, cleaned query params, None) or (None, None, error response)
    """
    query = TeamActivityQueryForm(request.GET)
    if not query.is_valid():
        return None, None, _query_error(query)

    filterset = ActivityFilter(request.GET, queryset=Activity.objects.all())
    if not filterset.is_valid():
        return None, None, validation_error_response(ValidationError(filterset.errors.as_data()))

    days = None if filterset.has_date_range else query.cleaned_data['days']
    filterset.queryset = get_team_queryset(days=days)
    return filterset.qs, query.cleaned_data, None


# =============================================================================
# Own Activity Views
# =============================================================================

@require_http_methods(['GET', 'POST'])
@api_login_required
def activity_list_view(request):
    """
    GET: recent activities (own, or whole team with all=true for admins).
    POST: create an activity.
    """
    if request.method == 'POST':
        return _create_activity(request)

    query = ActivityQueryForm(request.GET)
    if not query.is_valid():
        return _query_error(query)

    params = query.cleaned_data
    include_team = params['all'] and request.user.can_view_team_activity()
    activities = get_user_activities(
        request.user,
        days=params['days'],
        limit=params['limit'],
        include_team=include_team,
        on_date=params['date'],
    )
    return json_success(activities=[a.to_dict(include_user=include_team) for a in activities])


def _create_activity(request):
    try:
        data = load_json_body(request)
    except ValueError as e:
        return json_error(str(e))

    try:
        activity = create_activity(request.user, data)
    except ValidationError as e:
        return validation_error_response(e)

    return json_success(status=201, activity=activity.to_dict())


@require_http_methods(['GET', 'PUT', 'PATCH', 'DELETE'])
@api_login_required
def activity_detail_view(request, pk):
    """Read, edit or delete a single activity (owner or admin)."""
    try:
        activity = Activity.objects.select_related('user').get(pk=pk)
    except Activity.DoesNotExist:
        return json_error('Activity not found', status=404)

    if not can_view_activity(request.user, activity):
        return json_error("You don't have permission to access this activity.", status=403)

    if request.method == 'GET':
        return json_success(activity=activity.to_dict(include_user=True))

    try:
        if request.method == 'DELETE':
            delete_activity(activity, request.user)
            return json_success(message='Activity deleted')

        try:
            data = load_json_body(request)
        except ValueError as e:
            return json_error(str(e))

        activity = update_activity(
            activity, request.user, data, partial=request.method == 'PATCH'
        )
    except PermissionDenied as e:
        return json_error(str(e), status=403)
    except ValidationError as e:
        return validation_error_response(e)

    return json_success(activity=activity.to_dict(include_user=True))


# =============================================================================
# Admin Views
# =============================================================================

@require_GET
@api_admin_required
def team_activity_view(request):
    """
    Team activities with filters, stats and pagination.
    """
    queryset, params, error = _filtered_team_queryset(request)
    if error:
        return error

    paginator = Paginator(queryset, params['page_size'])
    page = request.GET.get('page', 1)

    try:
        activities = paginator.page(page)
    except PageNotAnInteger:
        activities = paginator.page(1)
    except EmptyPage:
        activities = paginator.page(paginator.num_pages)

    return json_success(
        activities=[serialize_team_activity(a) for a in activities],
        stats=get_team_stats(queryset),
        pagination={
            'page': activities.number,
            'page_size': params['page_size'],
            'total_pages': paginator.num_pages,
            'total': paginator.count,
            'has_next': activities.has_next(),
            'has_previous': activities.has_previous(),
        },
        filters=get_filter_options(),
    )


@require_GET
@api_admin_required
def team_activity_export_view(request):
    """Download the filtered team activities as an .xlsx workbook."""
    queryset, _, error = _filtered_team_queryset(request)
    if error:
        return error

    workbook = build_workbook(queryset)
    filename = export_filename()
    logger.info('Team activity export %s by %s', filename, request.user.email)

    response = HttpResponse(workbook_bytes(workbook), content_type=XLSX_CONTENT_TYPE)
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


@require_GET
@api_admin_required
def weekly_activity_view(request):
    """Monday-Friday of the requested week, activities grouped per day."""
    query = WeekQueryForm(request.GET)
    if not query.is_valid():
        return _query_error(query)

    filterset = ActivityFilter(request.GET, queryset=get_team_queryset())
    if not filterset.is_valid():
        return validation_error_response(ValidationError(filterset.errors.as_data()))

    week_of = query.cleaned_data['week_of'] or timezone.localdate()
    monday, friday, days = group_week(filterset.qs, week_of)

    return json_success(
        week_start=monday.isoformat(),
        week_end=friday.isoformat(),
        days=[
            {
                'date': day.isoformat(),
                'weekday': f"{day:%A}",
                'activities': [serialize_team_activity(a) for a in items],
            }
            for day, items in days.items()
        ],
    )
