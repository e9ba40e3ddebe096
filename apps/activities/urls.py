"""
URL configuration for activities app.

Includes:
- Dashboard
- Activity list with filters
- Activity create / detail
- Status updates
- Daily view
- HTMX partials
"""

from django.urls import path
from . import views

app_name = 'activities'

urlpatterns = [
    # Dashboard (main view)
    path('dashboard/', views.dashboard, name='dashboard'),

    # Activity management
    path('activities/', views.activity_list, name='activity_list'),
    path('activities/create/', views.activity_create, name='activity_create'),
    path('activities/<int:pk>/', views.activity_detail, name='activity_detail'),

    # Status updates
    path('activities/<int:pk>/update/', views.activity_update, name='activity_update'),

    # Daily view
    path('daily-view/', views.daily_view, name='daily_view'),

    # HTMX Partials
    path('partials/counts/', views.partials_counts, name='partials_counts'),
]
