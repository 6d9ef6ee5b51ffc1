"""
Views for accounts app.

Includes:
- Identity validation (is the asserted email provisioned?)
- Current user and notification settings
- Team member list (admin only)
"""

from django.core.exceptions import ValidationError
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_GET, require_http_methods

from .middleware import (
    asserted_identity, json_error, json_success, load_json_body,
    validation_error_response,
)
from .permissions import api_admin_required, api_login_required
from .services import get_team_members, update_user_settings


# =============================================================================
# Authentication Views
# =============================================================================

@require_GET
@ensure_csrf_cookie
def validate_view(request):
    """
    Report whether the caller is an admitted user.

    - 200: identity asserted and provisioned
    - 403: identity asserted but the email is not provisioned
    - 401: no identity asserted

    Also sets the CSRF cookie the client needs for unsafe API methods.
    """
    if request.user.is_authenticated and request.user.is_active:
        return json_success(user=request.user.to_dict())

    if asserted_identity(request):
        return json_error(
            'Access denied. This email is not authorized to use this application.',
            status=403,
            unauthorized=True,
        )

    return json_error('Unauthorized', status=401)


# =============================================================================
# Current User Views
# =============================================================================

@require_GET
@api_login_required
def me_view(request):
    """Current user including notification settings."""
    return json_success(user=request.user.to_dict(include_settings=True))


@require_http_methods(['PUT'])
@api_login_required
def settings_view(request):
    """Replace the current user's time zone and reminder preferences."""
    try:
        data = load_json_body(request)
    except ValueError as e:
        return json_error(str(e))

    try:
        user = update_user_settings(request.user, data)
    except ValidationError as e:
        return validation_error_response(e)

    return json_success(
        message='Settings updated successfully',
        user=user.to_dict(include_settings=True),
    )


# =============================================================================
# Admin Views
# =============================================================================

@require_GET
@api_admin_required
def user_list_view(request):
    """All users (id, name, email) ordered by name."""
    users = [
        {'id': u.pk, 'name': u.get_full_name(), 'email': u.email}
        for u in get_team_members()
    ]
    return json_success(users=users)
