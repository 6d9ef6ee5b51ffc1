"""
Activity model for daily developer updates.

One row per logical update (standup note, code review summary, EOD wrap-up).
The reminder routine reads this table only to answer "has this user
submitted anything dated on their local today?".
"""

from django.conf import settings
from django.db import models


class Activity(models.Model):
    """
    A developer's activity update for one calendar day.

    Access: Owner and Admins
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='activities',
    )
    date = models.DateField(
        db_index=True,
        help_text="Calendar day in the owner's time zone",
    )
    meeting_type = models.CharField(max_length=100)
    summary = models.TextField(help_text='Progress notes')
    tickets = models.TextField(
        blank=True,
        default='',
        help_text='Comma-separated ticket references',
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'activity'
        verbose_name_plural = 'activities'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['user', 'date'], name='activity_user_date_idx'),
            models.Index(fields=['date', 'created_at'], name='activity_date_created_idx'),
        ]

    def __str__(self):
        return f"{self.user.get_full_name()} - {self.meeting_type} ({self.date})"

    @property
    def ticket_list(self):
        """Ticket references as a list, blanks dropped."""
        return [t.strip() for t in self.tickets.split(',') if t.strip()]

    def to_dict(self, include_user=False):
        data = {
            'id': self.pk,
            'date': self.date.isoformat(),
            'meeting_type': self.meeting_type,
            'summary': self.summary,
            'tickets': self.ticket_list,
            'timestamp': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_user:
            data['user_id'] = self.user_id
            data['user_name'] = self.user.get_full_name()
        return data
