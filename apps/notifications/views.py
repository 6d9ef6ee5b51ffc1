"""
Views for notifications app.

Includes:
- Reminder trigger endpoint for the external scheduler
"""

import hmac
import logging

from django.conf import settings
from django.utils import timezone
from django.views.decorators.http import require_GET

from apps.accounts.middleware import json_error, json_success
from .reminders import run_reminders

logger = logging.getLogger(__name__)


def is_authorized_cron_request(request):
    """
    Check the scheduler's bearer token.

    Closed mode (CRON_SECRET set): Authorization must be "Bearer <secret>".
    Open mode (CRON_SECRET empty): every request is allowed; local use only.
    """
    secret = getattr(settings, 'CRON_SECRET', '')
    if not secret:
        return True

    supplied = request.META.get('HTTP_AUTHORIZATION', '')
    return hmac.compare_digest(supplied.encode(), f'Bearer {secret}'.encode())


@require_GET
def reminders_cron_view(request):
    """Run the reminder routine once and report the results."""
    if not is_authorized_cron_request(request):
        logger.warning('Rejected reminder trigger without a valid bearer token')
        return json_error('Unauthorized', status=401)

    try:
        run = run_reminders()
    except Exception as e:
        logger.exception('Reminder run failed')
        return json_error('Internal server error', status=500, message=str(e))

    return json_success(
        message='Reminder emails processed',
        results=run.as_dict(),
        timestamp=timezone.now().isoformat(),
    )
