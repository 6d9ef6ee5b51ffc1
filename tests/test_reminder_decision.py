"""
Reminder window, decision and email copy tests.
"""

from zoneinfo import ZoneInfoNotFoundError

from django.test import SimpleTestCase, override_settings

from apps.notifications.reminders import (
    ReminderType, decide_reminder, due_reminder, local_time,
)
from apps.notifications.services import hour_label, reminder_copy

from .utils import NOW


# =============================================================================
# Time zone evaluator
# =============================================================================

class LocalTimeTests(SimpleTestCase):

    def test_converts_to_user_zone(self):
        local = local_time('America/New_York', NOW)
        self.assertEqual((local.hour, local.minute), (11, 30))
        self.assertEqual(local.date().isoformat(), '2026-03-02')

    def test_local_date_can_differ_from_utc_date(self):
        local = local_time('Asia/Tokyo', NOW)
        self.assertEqual(local.date().isoformat(), '2026-03-03')
        self.assertEqual(local.hour, 1)

    def test_same_instant(self):
        self.assertEqual(local_time('Europe/London', NOW), NOW)

    def test_unknown_zone_raises(self):
        with self.assertRaises(ZoneInfoNotFoundError):
            local_time('Nowhere/Place', NOW)


# =============================================================================
# Window policy
# =============================================================================

@override_settings(REMINDER_MIDDAY_HOUR=12, REMINDER_EOD_HOUR=18)
class DueReminderTests(SimpleTestCase):

    def test_midday_window_is_hour_before_threshold(self):
        self.assertEqual(due_reminder(11, True, True), ReminderType.MIDDAY)
        self.assertIsNone(due_reminder(10, True, True))
        self.assertIsNone(due_reminder(12, True, True))

    def test_eod_window_is_hour_before_threshold(self):
        self.assertEqual(due_reminder(17, True, True), ReminderType.EOD)
        self.assertIsNone(due_reminder(16, True, True))
        self.assertIsNone(due_reminder(18, True, True))

    def test_disabled_preferences(self):
        self.assertIsNone(due_reminder(11, False, True))
        self.assertIsNone(due_reminder(17, True, False))

    def test_no_window_outside_hours(self):
        for hour in (0, 6, 9, 13, 15, 20, 23):
            with self.subTest(hour=hour):
                self.assertIsNone(due_reminder(hour, True, True))

    @override_settings(REMINDER_MIDDAY_HOUR=13, REMINDER_EOD_HOUR=17)
    def test_thresholds_come_from_settings(self):
        self.assertEqual(due_reminder(12, True, True), ReminderType.MIDDAY)
        self.assertEqual(due_reminder(16, True, True), ReminderType.EOD)
        self.assertIsNone(due_reminder(11, True, True))


@override_settings(REMINDER_MIDDAY_HOUR=12, REMINDER_EOD_HOUR=18)
class DecideReminderTests(SimpleTestCase):

    def test_sends_when_due_and_not_submitted(self):
        decision = decide_reminder(11, True, True, False)
        self.assertEqual(decision.reminder_type, ReminderType.MIDDAY)
        self.assertTrue(decision.should_send)

    def test_already_submitted_is_skip_in_window(self):
        decision = decide_reminder(17, True, True, True)
        self.assertTrue(decision.already_submitted)
        self.assertEqual(decision.reminder_type, ReminderType.EOD)
        self.assertFalse(decision.should_send)

    def test_already_submitted_is_skip_outside_window(self):
        decision = decide_reminder(9, True, True, True)
        self.assertTrue(decision.already_submitted)
        self.assertIsNone(decision.reminder_type)
        self.assertFalse(decision.should_send)

    def test_nothing_due(self):
        decision = decide_reminder(14, True, True, False)
        self.assertFalse(decision.already_submitted)
        self.assertFalse(decision.should_send)


# =============================================================================
# Email copy
# =============================================================================

class ReminderCopyTests(SimpleTestCase):

    def test_hour_label(self):
        self.assertEqual(hour_label(12), '12pm')
        self.assertEqual(hour_label(18), '6pm')
        self.assertEqual(hour_label(0), '12am')
        self.assertEqual(hour_label(9), '9am')

    @override_settings(REMINDER_MIDDAY_HOUR=12)
    def test_subjects(self):
        self.assertEqual(reminder_copy('midday')['subject'], 'Time for your 12pm update!')
        self.assertEqual(reminder_copy('eod')['subject'], 'Time for your EOD update!')

    @override_settings(REMINDER_MIDDAY_HOUR=13)
    def test_midday_subject_follows_threshold(self):
        self.assertEqual(reminder_copy(ReminderType.MIDDAY)['subject'], 'Time for your 1pm update!')

