"""
URL configuration for activities app.

Includes:
- Own activity CRUD
- Team review, export and weekly view (admin only)
"""

from django.urls import path
from . import views

app_name = 'activities'

urlpatterns = [
    # Own activities
    path('activities/', views.activity_list_view, name='activity_list'),
    path('activities/<int:pk>/', views.activity_detail_view, name='activity_detail'),

    # Admin
    path('admin/activities/', views.team_activity_view, name='team_activity'),
    path('admin/activities/export/', views.team_activity_export_view, name='team_activity_export'),
    path('admin/activities/weekly/', views.weekly_activity_view, name='weekly_activity'),
]
