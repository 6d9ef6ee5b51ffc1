"""
Custom authentication backend for identity-provider logins.

The authenticating proxy has already verified the user; this backend only
decides whether the asserted email belongs to a provisioned, active user.
"""

import logging

from django.conf import settings
from django.contrib.auth.backends import RemoteUserBackend

logger = logging.getLogger(__name__)


class ProvisionedUserBackend(RemoteUserBackend):
    """
    Admit pre-provisioned users identified by the forwarded email header.

    Features:
    - Email matching is case-insensitive (emails are stored lowercased)
    - Unknown emails are rejected, never auto-created
    - Inactive users are rejected
    - Display name is synced from the provider on login
    """

    create_unknown_user = False

    def clean_username(self, username):
        """Normalize the asserted email the same way UserManager stores it."""
        return (username or '').strip().lower()

    def authenticate(self, request, remote_user):
        user = super().authenticate(request, remote_user)
        if user is None and remote_user:
            logger.warning('Rejected identity for unprovisioned email %s', self.clean_username(remote_user))
        return user

    def configure_user(self, request, user, created=False):
        """Sync the display name asserted by the identity provider."""
        if user is None or request is None:
            return user

        header = getattr(settings, 'REMOTE_USER_NAME_HEADER', 'HTTP_X_FORWARDED_NAME')
        name = request.META.get(header, '')
        if user.set_display_name(name):
            user.save(update_fields=['first_name', 'last_name', 'updated_at'])
        return user
