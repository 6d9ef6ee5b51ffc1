"""
Shared fixtures for the test suite.
"""

import json
from datetime import date, datetime, timezone as dt_timezone

from apps.accounts.models import User
from apps.activities.models import Activity

# 11:30 in New York (EST), 16:30 in London (GMT), 01:30 next day in Tokyo
NOW = datetime(2026, 3, 2, 16, 30, tzinfo=dt_timezone.utc)
TODAY = date(2026, 3, 2)


def make_user(email, first_name='Test', last_name='User', **extra):
    return User.objects.create_user(
        email=email, first_name=first_name, last_name=last_name, **extra
    )


def make_admin(email='admin@example.com', **extra):
    extra.setdefault('role', User.Role.ADMIN)
    return make_user(email, first_name='Ada', last_name='Admin', **extra)


def make_activity(user, day=TODAY, meeting_type='Daily Standup', summary='Worked on things', tickets=''):
    return Activity.objects.create(
        user=user, date=day, meeting_type=meeting_type, summary=summary, tickets=tickets
    )


def as_user(user):
    """Request kwargs that make the test client look proxied for `user`."""
    return {'HTTP_X_FORWARDED_EMAIL': user.email}


def json_body(data):
    return {'data': json.dumps(data), 'content_type': 'application/json'}
