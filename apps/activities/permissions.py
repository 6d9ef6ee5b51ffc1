"""
Permission helpers for activities app.

Role-based access control for activity operations:
- Admin: View, edit and delete every activity; review the whole team
- User: View, edit and delete own activities only
"""


def can_view_activity(user, activity):
    """Owner or admin."""
    if not user.is_authenticated:
        return False
    return activity.user_id == user.pk or user.is_admin()


def can_edit_activity(user, activity):
    """Owner or admin."""
    return can_view_activity(user, activity)


def can_delete_activity(user, activity):
    return can_edit_activity(user, activity)
