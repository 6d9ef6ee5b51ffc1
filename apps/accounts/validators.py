"""
Validators for accounts app.

Includes:
- validate_timezone: IANA time zone names for reminder scheduling
- StrictBooleanField: form field that only accepts JSON booleans
- StrictCharField / StrictDateField: JSON string-only text and date fields
"""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django import forms
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _


def validate_timezone(value):
    """
    Validate that value names a time zone known to the zoneinfo database.

    Raises:
        ValidationError: If the zone is unknown or malformed
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(_('Invalid timezone'), code='invalid_timezone')

    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        raise ValidationError(
            _('Unknown timezone: %(value)s'),
            code='invalid_timezone',
            params={'value': value},
        )


class StrictBooleanField(forms.Field):
    """
    Boolean field for JSON payloads.

    forms.BooleanField coerces anything truthy; settings updates must send
    real true/false values.
    """

    default_error_messages = {
        'invalid': _('Must be true or false.'),
    }

    def to_python(self, value):
        if isinstance(value, bool):
            return value
        if value in self.empty_values:
            return None
        raise ValidationError(self.error_messages['invalid'], code='invalid')


class StrictCharField(forms.CharField):
    """
    Text field for JSON payloads.

    forms.CharField stringifies lists, numbers and objects; reject them.
    """

    default_error_messages = {
        'invalid': _('Must be a string.'),
    }

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, str):
            raise ValidationError(self.error_messages['invalid'], code='invalid')
        return super().to_python(value)


class StrictDateField(forms.DateField):
    """Date field for JSON payloads: only YYYY-MM-DD strings are parsed."""

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, str):
            raise ValidationError(self.error_messages['invalid'], code='invalid')
        return super().to_python(value)
