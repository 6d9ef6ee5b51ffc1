"""
Reminder routine: email opted-in users who have not logged today's update.

Per opted-in user, sequentially:
1. local_time: the run's instant in the user's zone
2. has_submitted_today: any activity dated on that local day?
3. decide_reminder: midday, eod or nothing
4. send_reminder_email (services.py)

Each user is evaluated inside its own error boundary (evaluate_user), so a bad
time zone or a failed send is recorded for that user and the run moves on.
Only failing to load the user list aborts the run.

Window policy: a reminder is due during the hour before its threshold in the
user's local time, e.g. 11:00-11:59 for REMINDER_MIDDAY_HOUR = 12. The
invocation's UTC hour is never used.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import List, Optional
from zoneinfo import ZoneInfo

from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.accounts.models import User
from apps.activities.services import has_submitted_on
from .services import send_reminder_email

logger = logging.getLogger(__name__)


class ReminderType(models.TextChoices):
    MIDDAY = 'midday', 'Midday update'
    EOD = 'eod', 'End of day update'


class Outcome(models.TextChoices):
    SENT = 'sent', 'Sent'
    SKIPPED = 'skipped_already_submitted', 'Skipped, already submitted'
    ERROR = 'error', 'Error'
    NOT_DUE = 'not_due', 'Not due'


# =============================================================================
# Time zone / submission check / decision
# =============================================================================

def local_time(tz_name, now):
    """
    `now` converted to the named IANA zone.

    Raises:
        ZoneInfoNotFoundError / ValueError: If the zone is unknown or malformed
    """
    return now.astimezone(ZoneInfo(tz_name))


def has_submitted_today(user, local_now):
    """True if the user has an activity dated on their local calendar day."""
    return has_submitted_on(user, local_now.date())


def _in_window(local_hour, threshold):
    return threshold - 1 <= local_hour < threshold


def due_reminder(local_hour, midday_enabled, eod_enabled):
    """
    Which reminder (if any) is due at this local hour.

    Midday is checked first; the two windows never overlap with sane
    thresholds, so at most one type is returned.
    """
    if midday_enabled and _in_window(local_hour, settings.REMINDER_MIDDAY_HOUR):
        return ReminderType.MIDDAY
    elif eod_enabled and _in_window(local_hour, settings.REMINDER_EOD_HOUR):
        return ReminderType.EOD
    return None


@dataclass(frozen=True)
class ReminderDecision:
    reminder_type: Optional[str] = None
    already_submitted: bool = False

    @property
    def should_send(self):
        return self.reminder_type is not None and not self.already_submitted


def decide_reminder(local_hour, midday_enabled, eod_enabled, submitted_today):
    """
    Pure decision for one user.

    A user who already submitted today is reported as skipped whatever the
    hour; the due reminder type (if any) is kept for the run summary.
    """
    return ReminderDecision(
        reminder_type=due_reminder(local_hour, midday_enabled, eod_enabled),
        already_submitted=submitted_today,
    )


# =============================================================================
# Outcomes
# =============================================================================

@dataclass
class ReminderOutcome:
    user: str
    status: str
    type: Optional[str] = None
    timezone: Optional[str] = None
    local_time: Optional[str] = None
    error: Optional[str] = None

    def as_dict(self):
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass
class ReminderRun:
    """Counters and per-user details for one run."""

    sent: int = 0
    skipped: int = 0
    errors: int = 0
    details: List[ReminderOutcome] = field(default_factory=list)

    def record(self, outcome):
        if outcome.status == Outcome.SENT:
            self.sent += 1
        elif outcome.status == Outcome.SKIPPED:
            self.skipped += 1
        elif outcome.status == Outcome.ERROR:
            self.errors += 1
        self.details.append(outcome)

    def as_dict(self):
        return {
            'sent': self.sent,
            'skipped': self.skipped,
            'errors': self.errors,
            'details': [outcome.as_dict() for outcome in self.details],
        }


# =============================================================================
# Run
# =============================================================================

def build_submission_url():
    return f"{settings.SITE_URL.rstrip('/')}{settings.REMINDER_SUBMISSION_PATH}"


def evaluate_user(user, now, submission_url):
    """
    Evaluate and (if due) remind one user. Never raises.

    Returns:
        ReminderOutcome
    """
    outcome = ReminderOutcome(user=user.email, status=Outcome.ERROR, timezone=user.timezone)

    try:
        local_now = local_time(user.timezone, now)
        outcome.local_time = local_now.isoformat()

        decision = decide_reminder(
            local_now.hour,
            user.reminder_midday,
            user.reminder_eod,
            has_submitted_today(user, local_now),
        )
        outcome.type = decision.reminder_type

        if decision.already_submitted:
            outcome.status = Outcome.SKIPPED
        elif not decision.should_send:
            outcome.status = Outcome.NOT_DUE
        elif send_reminder_email(user, decision.reminder_type, submission_url):
            outcome.status = Outcome.SENT
        else:
            outcome.status = Outcome.ERROR
            outcome.error = 'Email delivery failed'
    except Exception as e:
        logger.exception('Reminder evaluation failed for %s', user.email)
        outcome.status = Outcome.ERROR
        outcome.error = str(e) or e.__class__.__name__

    return outcome


def run_reminders(now=None):
    """
    Evaluate every opted-in user once.

    Args:
        now: Instant to evaluate at (defaults to the current time)

    Returns:
        ReminderRun

    Raises:
        Any error raised while loading the opted-in users
    """
    now = now or timezone.now()
    submission_url = build_submission_url()

    users = list(User.objects.opted_in().order_by('email'))
    logger.info('Reminder run at %s: %d opted-in user(s)', now.isoformat(), len(users))

    run = ReminderRun()
    for user in users:
        run.record(evaluate_user(user, now, submission_url))

    logger.info(
        'Reminder run completed: %d sent, %d skipped, %d errors',
        run.sent, run.skipped, run.errors,
    )
    return run
