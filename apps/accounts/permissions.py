"""
Permission decorators for the JSON API.

- Anonymous callers: 401 {"error": "Unauthorized"}
- Non-admins on admin endpoints: 403
"""

from functools import wraps

from .middleware import json_error


# =============================================================================
# View Decorators
# =============================================================================

def api_login_required(view_func):
    """Require an authenticated, active user."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        user = request.user
        if not user.is_authenticated or not user.is_active:
            return json_error('Unauthorized', status=401)
        return view_func(request, *args, **kwargs)
    return _wrapped


def api_admin_required(view_func):
    """Require an authenticated admin."""
    @wraps(view_func)
    @api_login_required
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_admin():
            return json_error('Access denied. Admin privileges required.', status=403)
        return view_func(request, *args, **kwargs)
    return _wrapped
