"""
Custom User model for devtracker.

CRITICAL: This file must be created and AUTH_USER_MODEL set before running
any migrations. Changing the User model after migrations is very complex.
"""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils import timezone as django_timezone


def default_timezone():
    return getattr(settings, 'DEFAULT_USER_TIMEZONE', 'UTC')


class UserManager(BaseUserManager):
    """
    Custom user manager where email is the unique identifier
    for authentication instead of username.
    """

    @classmethod
    def normalize_email(cls, email):
        """Emails are stored fully lowercased; the identity header is matched exactly."""
        return (email or '').strip().lower()

    def create_user(self, email, password=None, **extra_fields):
        """
        Provision a user. Users authenticated through the identity provider
        have no usable password.
        """
        if not email:
            raise ValueError('The Email field must be set')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a SuperUser with the given email and password."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', User.Role.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)

    def opted_in(self):
        """Active users with the overall email-notifications toggle on."""
        return self.filter(email_notifications=True, is_active=True)


class User(AbstractUser):
    """
    Custom User model with email authentication and role-based access.

    Roles:
    - Admin: Review and export team activity, edit anyone's updates
    - User: Log and manage own activity updates
    """

    class Role(models.TextChoices):
        ADMIN = 'admin', 'Admin'
        USER = 'user', 'User'

    # Remove username field, use email instead
    username = None
    email = models.EmailField(
        'email address',
        unique=True,
        error_messages={
            'unique': 'A user with that email already exists.',
        },
    )

    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.USER,
        db_index=True,
    )

    # Notification preferences
    timezone = models.CharField(
        max_length=64,
        default=default_timezone,
        help_text='IANA time zone name, e.g. America/New_York.',
    )
    email_notifications = models.BooleanField(
        default=True,
        db_index=True,
        help_text='Master switch for reminder emails.',
    )
    reminder_midday = models.BooleanField(
        default=True,
        help_text='Send the midday update reminder.',
    )
    reminder_eod = models.BooleanField(
        default=True,
        help_text='Send the end-of-day update reminder.',
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        verbose_name = 'user'
        verbose_name_plural = 'users'
        ordering = ['first_name', 'last_name']

    def __str__(self):
        return f"{self.get_full_name()} ({self.email})"

    def get_full_name(self):
        """Return the first_name plus the last_name, with a space in between."""
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email

    def get_short_name(self):
        """Return the short name for the user."""
        return self.first_name or self.email.split('@')[0]

    def is_admin(self):
        """Check if user is an Admin."""
        return self.role == self.Role.ADMIN

    def can_view_team_activity(self):
        return self.is_admin()

    def local_now(self, now=None):
        """
        Current time in the user's zone.

        Unknown zones fall back to the server zone so that activity creation
        never fails on a bad profile value.
        """
        now = now or django_timezone.now()
        try:
            return now.astimezone(ZoneInfo(self.timezone))
        except (ZoneInfoNotFoundError, ValueError, OSError):
            return django_timezone.localtime(now)

    def local_today(self, now=None):
        return self.local_now(now).date()

    def set_display_name(self, name):
        """
        Split a provider-supplied display name into first/last name.

        Returns True if anything changed.
        """
        name = (name or '').strip()
        if not name:
            return False

        first_name, _, last_name = name.partition(' ')
        last_name = last_name.strip()
        if (first_name, last_name) == (self.first_name, self.last_name):
            return False

        self.first_name = first_name
        self.last_name = last_name
        return True

    def to_dict(self, include_settings=False):
        data = {
            'id': self.pk,
            'email': self.email,
            'name': self.get_full_name(),
            'role': self.role,
        }
        if include_settings:
            data.update({
                'timezone': self.timezone,
                'email_notifications': self.email_notifications,
                'reminder_midday': self.reminder_midday,
                'reminder_eod': self.reminder_eod,
            })
        return data
