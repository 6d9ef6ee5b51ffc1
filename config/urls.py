"""
URL configuration for devtracker project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings

urlpatterns = [
    path('admin/', admin.site.urls),

    # JSON API
    path('api/', include('apps.accounts.urls', namespace='accounts')),
    path('api/', include('apps.activities.urls', namespace='activities')),
    path('api/cron/', include('apps.notifications.urls', namespace='notifications')),
]

if settings.DEBUG and 'debug_toolbar' in settings.INSTALLED_APPS:
    import debug_toolbar
    urlpatterns = [
        path('__debug__/', include(debug_toolbar.urls)),
    ] + urlpatterns

# Admin site customization
admin.site.site_header = 'DevTracker Administration'
admin.site.site_title = 'DevTracker Admin'
admin.site.index_title = 'Welcome to DevTracker Admin'
