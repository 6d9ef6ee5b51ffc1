"""
Service layer for accounts app.

Centralized business logic for:
- Notification settings updates
- Team member listings
"""

import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError

from .forms import UserSettingsForm

logger = logging.getLogger(__name__)

User = get_user_model()


def update_user_settings(user, data):
    """
    Update a user's time zone and reminder preferences.

    Args:
        user: User instance
        data: Decoded JSON payload

    Returns:
        User: The updated user

    Raises:
        ValidationError: With the form's error dict if the payload is invalid
    """
    form = UserSettingsForm(data=data, instance=user)
    if not form.is_valid():
        raise ValidationError(form.errors.as_data())

    user = form.save()
    logger.info(
        'Settings updated for %s: tz=%s notifications=%s midday=%s eod=%s',
        user.email, user.timezone, user.email_notifications,
        user.reminder_midday, user.reminder_eod,
    )
    return user


def get_team_members():
    """All users ordered by name, for admin filter dropdowns."""
    return User.objects.order_by('first_name', 'last_name', 'email')
