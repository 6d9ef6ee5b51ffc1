"""
Forms for activities app.

Validate decoded JSON bodies and query strings:
- ActivityForm: create/update an activity
- ActivityQueryForm: own/team activity listing parameters
- TeamActivityQueryForm: admin review window and page size
- WeekQueryForm: admin weekly view
"""

from django import forms
from django.conf import settings
from django.utils.translation import gettext_lazy as _

from apps.accounts.validators import StrictCharField, StrictDateField
from .models import Activity


def _range_field(label, minimum, maximum, default):
    message = f'{label} parameter must be between {minimum} and {maximum}'
    return forms.IntegerField(
        required=False,
        min_value=minimum,
        max_value=maximum,
        initial=default,
        error_messages={
            'invalid': message,
            'min_value': message,
            'max_value': message,
        },
    )


class TicketListField(forms.Field):
    """
    Ticket references as a JSON list or a comma-separated string.

    Cleans to the stored comma-separated form.
    """

    default_error_messages = {
        'invalid': _('Tickets must be a list of strings or a comma-separated string.'),
    }

    def to_python(self, value):
        if value in self.empty_values:
            return ''
        if isinstance(value, str):
            items = value.split(',')
        elif isinstance(value, (list, tuple)):
            if not all(isinstance(item, str) for item in value):
                raise forms.ValidationError(self.error_messages['invalid'], code='invalid')
            items = value
        else:
            raise forms.ValidationError(self.error_messages['invalid'], code='invalid')
        return ','.join(item.strip() for item in items if item.strip())


class ActivityForm(forms.ModelForm):
    """
    Activity create/update form.

    `date` is optional; the service fills in the owner's local today.
    """

    meeting_type = StrictCharField(
        max_length=100,
        error_messages={
            'required': _('Meeting type is required'),
            'max_length': _('Meeting type must be at most 100 characters'),
        },
    )
    summary = StrictCharField(
        error_messages={'required': _('Activity details are required')},
    )
    tickets = TicketListField(required=False)
    date = StrictDateField(
        required=False,
        input_formats=['%Y-%m-%d'],
        error_messages={'invalid': _('Date must be in YYYY-MM-DD format')},
    )

    class Meta:
        model = Activity
        fields = ['meeting_type', 'summary', 'tickets', 'date']


class QueryDefaultsMixin:
    """Fill omitted optional parameters with their field's initial value."""

    def clean(self):
        cleaned_data = super().clean()
        for name, field in self.fields.items():
            if cleaned_data.get(name) is None and field.initial is not None:
                cleaned_data[name] = field.initial
        return cleaned_data


class ActivityQueryForm(QueryDefaultsMixin, forms.Form):
    """Query string for GET /api/activities/."""

    days = _range_field('Days', 1, settings.ACTIVITY_MAX_DAYS, settings.ACTIVITY_DEFAULT_DAYS)
    limit = _range_field('Limit', 1, settings.ACTIVITY_MAX_LIMIT, settings.ACTIVITY_DEFAULT_LIMIT)
    all = forms.BooleanField(required=False)
    date = forms.DateField(
        required=False,
        input_formats=['%Y-%m-%d'],
        error_messages={'invalid': _('Date must be in YYYY-MM-DD format')},
    )


class TeamActivityQueryForm(QueryDefaultsMixin, forms.Form):
    """Query string for the admin review endpoints (filters live in ActivityFilter)."""

    days = _range_field('Days', 1, settings.ACTIVITY_MAX_DAYS, settings.ADMIN_ACTIVITY_DEFAULT_DAYS)
    page_size = _range_field('Page size', 1, settings.ACTIVITY_MAX_LIMIT, settings.ADMIN_ACTIVITY_PAGE_SIZE)


class WeekQueryForm(forms.Form):
    """Query string for the admin weekly view."""

    week_of = forms.DateField(
        required=False,
        input_formats=['%Y-%m-%d'],
        error_messages={'invalid': _('week_of must be in YYYY-MM-DD format')},
    )
