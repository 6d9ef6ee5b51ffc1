"""
Custom middleware and JSON response helpers for accounts app.

Includes:
- ForwardedEmailMiddleware: logs in the user asserted by the identity provider
- json_error / json_success / validation_error_response / load_json_body:
  API response conventions

Authentication is delegated to an authenticating proxy in front of the app.
The proxy verifies the user with the identity provider and forwards the
verified email address in a request header.
"""

import json

from django.conf import settings
from django.contrib.auth.middleware import RemoteUserMiddleware
from django.http import JsonResponse


def json_error(error, status=400, **extra):
    """Return a JSON error response: {"error": error, ...extra}."""
    payload = {'error': error}
    payload.update(extra)
    return JsonResponse(payload, status=status)


def json_success(status=200, **data):
    """Return a JSON success response: {"success": true, ...data}."""
    payload = {'success': True}
    payload.update(data)
    return JsonResponse(payload, status=status)


def validation_error_response(error, status=400):
    """
    Translate a ValidationError into a 400 response.

    The first message goes in `error`; every field's messages go in
    `errors` (non-field errors under "__all__").
    """
    if hasattr(error, 'error_dict'):
        errors = error.message_dict
    else:
        errors = {'__all__': error.messages}

    first_message = 'Invalid request'
    for messages in errors.values():
        if messages:
            first_message = messages[0]
            break
    return json_error(first_message, status=status, errors=errors)


def load_json_body(request):
    """
    Decode a JSON object request body.

    Raises:
        ValueError: If the body is not a JSON object
    """
    try:
        data = json.loads(request.body or b'{}')
    except (TypeError, UnicodeDecodeError, json.JSONDecodeError):
        raise ValueError('Invalid JSON body')

    if not isinstance(data, dict):
        raise ValueError('Invalid JSON body')
    return data


def asserted_identity(request):
    """Email asserted by the identity provider for this request, if any."""
    header = getattr(settings, 'REMOTE_USER_EMAIL_HEADER', 'HTTP_X_FORWARDED_EMAIL')
    return request.META.get(header, '').strip().lower()


class ForwardedEmailMiddleware(RemoteUserMiddleware):
    """
    Authenticate users from the identity provider's forwarded email header.

    Unknown emails are never created (see ProvisionedUserBackend); the
    request simply stays anonymous and API views answer 401/403.

    Requests without the header are left alone so that Django admin
    password sessions keep working.
    """

    force_logout_if_no_header = False

    @property
    def header(self):
        return getattr(settings, 'REMOTE_USER_EMAIL_HEADER', 'HTTP_X_FORWARDED_EMAIL')
