"""
URL configuration for accounts app.

Includes:
- Identity validation
- Current user and settings
- Team member list (admin only)
"""

from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [
    # Authentication
    path('auth/validate/', views.validate_view, name='validate'),

    # Current user
    path('user/me/', views.me_view, name='me'),
    path('user/settings/', views.settings_view, name='settings'),

    # Admin
    path('admin/users/', views.user_list_view, name='user_list'),
]
