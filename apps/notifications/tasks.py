"""
Scheduled tasks for notifications app.

Background jobs for:
- Activity reminders (hourly, see setup_schedules)
"""

from .reminders import run_reminders


def send_reminder_emails():
    """
    Scheduled job to run hourly.

    Each run only reminds users whose local hour falls in a reminder window,
    so running every hour covers every time zone.

    Returns:
        dict: Run summary (stored by Django-Q2 as the task result)
    """
    run = run_reminders()
    return {
        'sent': run.sent,
        'skipped': run.skipped,
        'errors': run.errors,
    }
