"""
Reminder run tests: per-user outcomes, counts and fault isolation.
"""

from datetime import date, datetime, timezone as dt_timezone
from smtplib import SMTPException
from unittest import mock

from django.core import mail
from django.db import DatabaseError
from django.test import TestCase, override_settings

from apps.activities.services import has_submitted_on
from apps.notifications.reminders import Outcome, ReminderType, run_reminders

from .utils import NOW, TODAY, make_activity, make_user


def details_by_user(run):
    return {outcome.user: outcome for outcome in run.details}


@override_settings(REMINDER_MIDDAY_HOUR=12, REMINDER_EOD_HOUR=18, SITE_URL='http://testserver')
class ReminderRunTests(TestCase):

    def test_end_to_end_sent_skipped_error(self):
        a = make_user('a@example.com', first_name='Alice', timezone='America/New_York')
        b = make_user('b@example.com', timezone='Europe/London')
        make_user('c@example.com', timezone='Nowhere/Place')
        make_activity(b, day=TODAY)

        run = run_reminders(now=NOW)

        self.assertEqual((run.sent, run.skipped, run.errors), (1, 1, 1))
        details = details_by_user(run)
        self.assertEqual(details['a@example.com'].status, Outcome.SENT)
        self.assertEqual(details['a@example.com'].type, ReminderType.MIDDAY)
        self.assertEqual(details['b@example.com'].status, Outcome.SKIPPED)
        self.assertEqual(details['c@example.com'].status, Outcome.ERROR)
        self.assertIn('Nowhere/Place', details['c@example.com'].error)

        self.assertEqual(len(mail.outbox), 1)
        message = mail.outbox[0]
        self.assertEqual(message.to, [a.email])
        self.assertEqual(message.subject, 'Time for your 12pm update!')
        self.assertIn('Hi Alice!', message.body)
        self.assertIn('http://testserver/dashboard', message.body)
        html, mimetype = message.alternatives[0]
        self.assertEqual(mimetype, 'text/html')
        self.assertIn('href="http://testserver/dashboard"', html)

    def test_result_dict_shape(self):
        make_user('a@example.com', timezone='America/New_York')
        make_user('c@example.com', timezone='Nowhere/Place')

        result = run_reminders(now=NOW).as_dict()

        self.assertEqual(set(result), {'sent', 'skipped', 'errors', 'details'})
        sent, errored = result['details']
        self.assertEqual(sent, {
            'user': 'a@example.com',
            'type': 'midday',
            'status': 'sent',
            'timezone': 'America/New_York',
            'local_time': '2026-03-02T11:30:00-05:00',
        })
        self.assertEqual(errored['status'], 'error')
        self.assertEqual(errored['timezone'], 'Nowhere/Place')
        self.assertNotIn('local_time', errored)
        self.assertNotIn('type', errored)

    def test_opted_out_users_are_never_evaluated(self):
        make_user('off@example.com', timezone='America/New_York', email_notifications=False)
        make_user('inactive@example.com', timezone='America/New_York', is_active=False)

        run = run_reminders(now=NOW)

        self.assertEqual(run.details, [])
        self.assertEqual(len(mail.outbox), 0)

    def test_submitted_today_is_skipped_regardless_of_hour(self):
        user = make_user('london@example.com', timezone='Europe/London')
        make_activity(user, day=TODAY)

        outcome = run_reminders(now=NOW).details[0]

        self.assertEqual(outcome.status, Outcome.SKIPPED)
        self.assertIsNone(outcome.type)

    def test_skip_keeps_due_reminder_type(self):
        user = make_user('ny@example.com', timezone='America/New_York')
        make_activity(user, day=TODAY)

        outcome = run_reminders(now=NOW).details[0]

        self.assertEqual(outcome.status, Outcome.SKIPPED)
        self.assertEqual(outcome.type, ReminderType.MIDDAY)
        self.assertEqual(len(mail.outbox), 0)

    def test_outside_window_is_not_due_and_not_counted(self):
        make_user('london@example.com', timezone='Europe/London')

        run = run_reminders(now=NOW)

        self.assertEqual((run.sent, run.skipped, run.errors), (0, 0, 0))
        self.assertEqual(run.details[0].status, Outcome.NOT_DUE)

    def test_disabled_midday_preference(self):
        make_user('ny@example.com', timezone='America/New_York', reminder_midday=False)

        run = run_reminders(now=NOW)

        self.assertEqual(run.details[0].status, Outcome.NOT_DUE)
        self.assertEqual(len(mail.outbox), 0)

    def test_eod_reminder(self):
        # 17:30 in London
        now = datetime(2026, 3, 2, 17, 30, tzinfo=dt_timezone.utc)
        make_user('london@example.com', timezone='Europe/London')

        run = run_reminders(now=now)

        self.assertEqual(run.sent, 1)
        self.assertEqual(run.details[0].type, ReminderType.EOD)
        self.assertEqual(mail.outbox[0].subject, 'Time for your EOD update!')

    def test_uses_local_hour_not_utc_hour(self):
        # 11:30 UTC is the midday window in UTC but 06:30 in New York
        now = datetime(2026, 3, 2, 11, 30, tzinfo=dt_timezone.utc)
        make_user('ny@example.com', timezone='America/New_York')
        make_user('utc@example.com', timezone='UTC')

        details = details_by_user(run_reminders(now=now))

        self.assertEqual(details['ny@example.com'].status, Outcome.NOT_DUE)
        self.assertEqual(details['utc@example.com'].status, Outcome.SENT)


@override_settings(REMINDER_MIDDAY_HOUR=12, REMINDER_EOD_HOUR=18)
class LocalDayMatchingTests(TestCase):
    """Only an activity dated on the user's local calendar day counts."""

    # 11:30 on March 3 in Auckland (NZDT, UTC+13) while it is still March 2 in UTC
    AUCKLAND_NOW = datetime(2026, 3, 2, 22, 30, tzinfo=dt_timezone.utc)

    def test_activity_on_utc_date_does_not_count(self):
        user = make_user('akl@example.com', timezone='Pacific/Auckland')
        make_activity(user, day=date(2026, 3, 2))

        outcome = run_reminders(now=self.AUCKLAND_NOW).details[0]

        self.assertEqual(outcome.status, Outcome.SENT)
        self.assertEqual(outcome.type, ReminderType.MIDDAY)

    def test_activity_on_local_date_counts(self):
        user = make_user('akl@example.com', timezone='Pacific/Auckland')
        make_activity(user, day=date(2026, 3, 3))

        outcome = run_reminders(now=self.AUCKLAND_NOW).details[0]

        self.assertEqual(outcome.status, Outcome.SKIPPED)

    def test_behind_utc_zone(self):
        # 17:30 on March 2 in Los Angeles (PST) is already March 3 in UTC
        now = datetime(2026, 3, 3, 1, 30, tzinfo=dt_timezone.utc)
        user = make_user('la@example.com', timezone='America/Los_Angeles')
        make_activity(user, day=date(2026, 3, 3))

        outcome = run_reminders(now=now).details[0]

        self.assertEqual(outcome.status, Outcome.SENT)
        self.assertEqual(outcome.type, ReminderType.EOD)

    def test_second_run_after_submission_is_skipped(self):
        user = make_user('ny@example.com', timezone='America/New_York')

        first = run_reminders(now=NOW).details[0]
        make_activity(user, day=TODAY)
        second = run_reminders(now=NOW.replace(minute=45)).details[0]

        self.assertEqual(first.status, Outcome.SENT)
        self.assertEqual(second.status, Outcome.SKIPPED)
        self.assertEqual(len(mail.outbox), 1)


@override_settings(REMINDER_MIDDAY_HOUR=12, REMINDER_EOD_HOUR=18)
class FaultIsolationTests(TestCase):

    def setUp(self):
        make_user('a@example.com', timezone='America/New_York')
        make_user('b@example.com', timezone='America/New_York')

    def test_delivery_failure_is_error_with_type(self):
        with mock.patch(
            'apps.notifications.services.EmailMultiAlternatives.send',
            side_effect=SMTPException('relay refused'),
        ):
            run = run_reminders(now=NOW)

        self.assertEqual((run.sent, run.errors), (0, 2))
        outcome = run.details[0]
        self.assertEqual(outcome.status, Outcome.ERROR)
        self.assertEqual(outcome.type, ReminderType.MIDDAY)
        self.assertEqual(outcome.error, 'Email delivery failed')

    def test_storage_error_for_one_user_does_not_stop_run(self):
        def flaky_check(user, day):
            if user.email == 'a@example.com':
                raise DatabaseError('connection reset')
            return has_submitted_on(user, day)

        with mock.patch('apps.notifications.reminders.has_submitted_on', side_effect=flaky_check):
            run = run_reminders(now=NOW)

        details = details_by_user(run)
        self.assertEqual(details['a@example.com'].status, Outcome.ERROR)
        self.assertEqual(details['a@example.com'].error, 'connection reset')
        self.assertEqual(details['b@example.com'].status, Outcome.SENT)
        self.assertEqual((run.sent, run.errors), (1, 1))

    def test_enumeration_failure_propagates(self):
        with mock.patch(
            'apps.accounts.models.UserManager.opted_in',
            side_effect=DatabaseError('database unavailable'),
        ):
            with self.assertRaises(DatabaseError):
                run_reminders(now=NOW)
