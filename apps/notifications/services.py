"""
Service layer for notifications app.

Email sending for activity reminders.
"""

import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)


def hour_label(hour):
    """24h hour to a short label: 12 -> '12pm', 18 -> '6pm', 0 -> '12am'."""
    suffix = 'am' if hour % 24 < 12 else 'pm'
    return f"{hour % 12 or 12}{suffix}"


def reminder_copy(reminder_type):
    """Subject, heading and message for a reminder type ('midday' or 'eod')."""
    if reminder_type == 'midday':
        label = hour_label(settings.REMINDER_MIDDAY_HOUR)
        return {
            'subject': f'Time for your {label} update!',
            'heading': f'{label} Update',
            'message': (
                f"It's time for your {label} update. Please share your progress "
                "and any updates from this morning."
            ),
        }
    return {
        'subject': 'Time for your EOD update!',
        'heading': 'EOD Update',
        'message': (
            "It's time for your End of Day (EOD) update. Please share your final "
            "progress and any completed work."
        ),
    }


def send_reminder_email(user, reminder_type, submission_url):
    """
    Send one reminder email.

    Args:
        user: User instance
        reminder_type: 'midday' or 'eod'
        submission_url: Link to the update form

    Returns:
        bool: True if email sent successfully
    """
    copy = reminder_copy(reminder_type)
    context = {
        'user': user,
        'name': user.first_name or 'there',
        'reminder_type': reminder_type,
        'heading': copy['heading'],
        'message': copy['message'],
        'submission_url': submission_url,
        'site_url': getattr(settings, 'SITE_URL', 'http://localhost:8000'),
    }

    # Render HTML and plain text versions
    html_content = render_to_string('notifications/emails/reminder.html', context)
    text_content = render_to_string('notifications/emails/reminder.txt', context)

    try:
        email = EmailMultiAlternatives(
            subject=copy['subject'],
            body=text_content,
            from_email=getattr(settings, 'DEFAULT_FROM_EMAIL', 'noreply@devtracker.com'),
            to=[user.email],
        )
        email.attach_alternative(html_content, 'text/html')
        email.send()
    except Exception as e:
        logger.error(f'Failed to send {reminder_type} reminder to {user.email}: {e}')
        return False

    logger.info(f'Reminder email sent to {user.email} for {reminder_type} update')
    return True
