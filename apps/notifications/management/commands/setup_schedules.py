"""
Management command to set up the Django-Q2 schedule for reminder emails.

This command creates/updates the scheduled task required for:
- Hourly activity reminder checks (midday and end-of-day windows)

Usage:
    python manage.py setup_schedules

The command is idempotent - safe to run multiple times.
An existing schedule is updated if its configuration changes.

If an external scheduler calls GET /api/cron/reminders/ instead, do not run
this command; users would be reminded twice.
"""
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone
from django_q.models import Schedule

SCHEDULE_NAME = 'Activity Reminder Check'
SCHEDULE_FUNC = 'apps.notifications.tasks.send_reminder_emails'


def next_top_of_hour(now=None):
    now = now or timezone.now()
    return now.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)


class Command(BaseCommand):
    help = 'Set up the Django-Q2 schedule for activity reminder emails'

    def handle(self, *args, **options):
        self.stdout.write('\nSetting up Django-Q2 schedules...\n')

        # Runs every hour, on the hour; each run only reminds users whose
        # local hour falls in a reminder window
        schedule, created = Schedule.objects.update_or_create(
            name=SCHEDULE_NAME,
            defaults={
                'func': SCHEDULE_FUNC,
                'schedule_type': Schedule.HOURLY,
                'repeats': -1,  # Run forever
                'next_run': next_top_of_hour(),
            }
        )
        if created:
            self.stdout.write(
                self.style.SUCCESS(f'✓ Created schedule: {SCHEDULE_NAME} (hourly)')
            )
        else:
            self.stdout.write(
                self.style.WARNING(f'↻ Updated schedule: {SCHEDULE_NAME} (hourly)')
            )

        self.stdout.write('')
        self.stdout.write(f'  • {SCHEDULE_NAME} → Runs every hour, first run at {schedule.next_run:%Y-%m-%d %H:%M %Z}')
        self.stdout.write('')
        self.stdout.write(
            self.style.NOTICE(
                'Note: Ensure Django-Q cluster is running: python manage.py qcluster'
            )
        )
        self.stdout.write('')
