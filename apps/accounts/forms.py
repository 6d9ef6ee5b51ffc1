"""
Forms for accounts app.

Includes:
- UserSettingsForm: time zone and reminder preferences
- ProvisionUserForm: admin-site user provisioning
"""

from django import forms
from django.contrib.auth import get_user_model
from django.utils.translation import gettext_lazy as _

from .validators import StrictBooleanField, StrictCharField, validate_timezone

User = get_user_model()


class UserSettingsForm(forms.ModelForm):
    """
    Update notification preferences.

    All fields are required; clients send the full settings object.
    """

    timezone = StrictCharField(
        max_length=64,
        validators=[validate_timezone],
        error_messages={'required': _('Timezone is required')},
    )
    email_notifications = StrictBooleanField(
        error_messages={'required': _('email_notifications is required')},
    )
    reminder_midday = StrictBooleanField(
        error_messages={'required': _('reminder_midday is required')},
    )
    reminder_eod = StrictBooleanField(
        error_messages={'required': _('reminder_eod is required')},
    )

    class Meta:
        model = User
        fields = ['timezone', 'email_notifications', 'reminder_midday', 'reminder_eod']


class ProvisionUserForm(forms.ModelForm):
    """
    Django admin add form.

    Provisioned users sign in through the identity provider, so no password
    is collected.
    """

    class Meta:
        model = User
        fields = ('email', 'first_name', 'last_name', 'role', 'timezone')

    def clean_email(self):
        email = User.objects.normalize_email(self.cleaned_data['email'])
        if User.objects.filter(email=email).exists():
            raise forms.ValidationError(_('A user with that email already exists.'))
        return email

    def clean_timezone(self):
        timezone = self.cleaned_data['timezone']
        validate_timezone(timezone)
        return timezone

    def save(self, commit=True):
        user = super().save(commit=False)
        user.set_unusable_password()
        if commit:
            user.save()
        return user
