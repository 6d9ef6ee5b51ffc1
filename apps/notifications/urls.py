"""
URL configuration for notifications app.
"""

from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    path('reminders/', views.reminders_cron_view, name='reminders_cron'),
]
