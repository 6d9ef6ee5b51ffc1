"""
Management command to run the reminder routine once.

Usage:
    python manage.py send_reminders
    python manage.py send_reminders --at 2026-03-02T16:30:00+00:00
    python manage.py send_reminders --verbose
"""
from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_datetime

from apps.notifications.reminders import run_reminders


class Command(BaseCommand):
    help = 'Evaluate every opted-in user once and send due reminder emails'

    def add_arguments(self, parser):
        parser.add_argument(
            '--at',
            help='ISO 8601 instant to evaluate at, with offset (default: now)',
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Print one line per user',
        )

    def handle(self, *args, **options):
        now = None
        if options['at']:
            now = parse_datetime(options['at'])
            if now is None or now.tzinfo is None:
                raise CommandError('--at must be an ISO 8601 datetime with a UTC offset')

        run = run_reminders(now=now)

        if options['verbose']:
            for outcome in run.details:
                line = f'  {outcome.user}: {outcome.status}'
                if outcome.type:
                    line += f' ({outcome.type})'
                if outcome.local_time:
                    line += f' at {outcome.local_time}'
                if outcome.error:
                    line += f' - {outcome.error}'
                self.stdout.write(line)

        self.stdout.write(
            self.style.SUCCESS(
                f'Done! {run.sent} sent, {run.skipped} skipped, {run.errors} error(s).'
            )
        )
