"""
Reminder trigger endpoint tests: open/closed mode, response shape, failures.
"""

from unittest import mock

from django.core import mail
from django.db import DatabaseError
from django.test import RequestFactory, SimpleTestCase, TestCase, override_settings
from django.urls import reverse

from apps.notifications.views import is_authorized_cron_request

from .utils import NOW, TODAY, make_activity, make_user

URL = reverse('notifications:reminders_cron')


class CronAuthorizationTests(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    @override_settings(CRON_SECRET='')
    def test_open_mode_allows_anonymous(self):
        self.assertTrue(is_authorized_cron_request(self.factory.get(URL)))

    @override_settings(CRON_SECRET='s3cret')
    def test_closed_mode_requires_bearer(self):
        self.assertFalse(is_authorized_cron_request(self.factory.get(URL)))
        self.assertFalse(is_authorized_cron_request(
            self.factory.get(URL, HTTP_AUTHORIZATION='Bearer wrong')
        ))
        self.assertFalse(is_authorized_cron_request(
            self.factory.get(URL, HTTP_AUTHORIZATION='s3cret')
        ))
        self.assertTrue(is_authorized_cron_request(
            self.factory.get(URL, HTTP_AUTHORIZATION='Bearer s3cret')
        ))


@override_settings(REMINDER_MIDDAY_HOUR=12, REMINDER_EOD_HOUR=18)
class CronEndpointTests(TestCase):

    def setUp(self):
        make_user('a@example.com', timezone='America/New_York')
        b = make_user('b@example.com', timezone='Europe/London')
        make_user('c@example.com', timezone='Nowhere/Place')
        make_activity(b, day=TODAY)

        patcher = mock.patch('django.utils.timezone.now', return_value=NOW)
        patcher.start()
        self.addCleanup(patcher.stop)

    @override_settings(CRON_SECRET='')
    def test_open_mode_runs_without_token(self):
        response = self.client.get(URL)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['message'], 'Reminder emails processed')
        self.assertEqual(data['timestamp'], NOW.isoformat())
        results = data['results']
        self.assertEqual(
            (results['sent'], results['skipped'], results['errors']), (1, 1, 1)
        )
        self.assertEqual(len(results['details']), 3)
        self.assertEqual(len(mail.outbox), 1)

    @override_settings(CRON_SECRET='s3cret')
    def test_closed_mode_without_token_is_rejected(self):
        response = self.client.get(URL)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {'error': 'Unauthorized'})
        self.assertEqual(len(mail.outbox), 0)

    @override_settings(CRON_SECRET='s3cret')
    def test_closed_mode_with_wrong_token_does_not_process_users(self):
        with mock.patch('apps.notifications.views.run_reminders') as run:
            response = self.client.get(URL, HTTP_AUTHORIZATION='Bearer nope')

        self.assertEqual(response.status_code, 401)
        run.assert_not_called()

    @override_settings(CRON_SECRET='s3cret')
    def test_closed_mode_with_token(self):
        response = self.client.get(URL, HTTP_AUTHORIZATION='Bearer s3cret')

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['success'])

    def test_enumeration_failure_is_500(self):
        with mock.patch(
            'apps.accounts.models.UserManager.opted_in',
            side_effect=DatabaseError('database unavailable'),
        ):
            response = self.client.get(URL)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {
            'error': 'Internal server error',
            'message': 'database unavailable',
        })

    def test_only_get_is_allowed(self):
        self.assertEqual(self.client.post(URL).status_code, 405)
