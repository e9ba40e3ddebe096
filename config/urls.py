"""
URL configuration for activity_tracker project.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

urlpatterns = [
    path('admin/', admin.site.urls),

    # App URLs
    path('', include('apps.accounts.urls', namespace='accounts')),
    path('', include('apps.activities.urls', namespace='activities')),
    path('reports/', include('apps.reports.urls', namespace='reports')),
]

# Serve static files in development
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATICFILES_DIRS[0])

    # Debug toolbar
    if 'debug_toolbar' in settings.INSTALLED_APPS:
        import debug_toolbar
        urlpatterns = [
            path('__debug__/', include(debug_toolbar.urls)),
        ] + urlpatterns

# Admin site customization
admin.site.site_header = 'Activity Tracker Administration'
admin.site.site_title = 'Activity Tracker Admin'
admin.site.index_title = 'Welcome to Activity Tracker Admin'
