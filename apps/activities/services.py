"""
Service layer for activities app.

All business logic for activity operations is centralized here, so views,
the admin and reports share one write path.

Services:
- create_activity: Create a new activity (always pending)
- record_update: Append a status update and mirror it onto the activity

Queries:
- get_activities: Activities annotated with their current status
- get_activity_overview: Every activity with its latest update
- get_activity_updates: Full history of one activity
- get_recent_updates: Most recent updates across all activities
- get_daily_updates: Updates recorded on one calendar day
- get_dashboard_counts: Summary numbers for the dashboard
"""

import logging
from datetime import datetime, time

from django.conf import settings
from django.db import transaction
from django.core.exceptions import PermissionDenied, ValidationError
from django.utils import timezone

from .models import Activity, ActivityUpdate, Category, Status, LATEST_FIRST
from .aggregation import group_updates

logger = logging.getLogger(__name__)


class AuthenticationRequired(PermissionDenied):
    """Raised when a write is attempted without a signed-in user."""


def _require_identity(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        raise AuthenticationRequired('You must be signed in to do this.')


def day_span(start_date, end_date=None):
    """
    Local start-of-day of start_date and end-of-day of end_date.

    Both datetimes are timezone-aware in the active time zone
    (TIME_ZONE unless overridden), and the span is inclusive.
    """
    end_date = end_date or start_date
    tz = timezone.get_current_timezone()
    start = timezone.make_aware(datetime.combine(start_date, time.min), tz)
    end = timezone.make_aware(datetime.combine(end_date, time.max), tz)
    return start, end


# =============================================================================
# Write Path
# =============================================================================

def create_activity(
    title: str,
    created_by,
    description: str = '',
    category: str = None,
):
    """
    Create a new activity.

    Args:
        title: Activity title (required)
        created_by: Signed-in user creating the activity (required)
        description: Longer description (optional)
        category: One of Category values; General when omitted

    Returns:
        Created Activity instance

    Raises:
        ValidationError: If the title is blank or the category unknown
        AuthenticationRequired: If there is no signed-in user
    """
    # Validate before touching the database
    if not title or not title.strip():
        raise ValidationError("Activity title is required.")

    _require_identity(created_by)

    category = category or Category.GENERAL
    if category not in Category.values:
        raise ValidationError(f"Invalid category: {category}")

    with transaction.atomic():
        activity = Activity.objects.create(
            title=title.strip(),
            description=description.strip() if description else '',
            category=category,
            status=Status.PENDING,
            created_by=created_by,
        )

    logger.info('Activity %s "%s" created by %s', activity.pk, activity.title, created_by.email)
    return activity


def record_update(activity, user, status: str, remarks: str = ''):
    """
    Append a status update to an activity.

    The update row and the activity's mirrored status are written in one
    transaction, so Activity.status always equals the latest update.

    Args:
        activity: Activity being updated
        user: Signed-in user recording the update
        status: pending or done
        remarks: Free-text remarks (optional)

    Returns:
        Created ActivityUpdate instance

    Raises:
        ValidationError: If status is not a valid choice
        AuthenticationRequired: If there is no signed-in user
    """
    if status not in Status.values:
        raise ValidationError(f"Invalid status: {status}")

    _require_identity(user)

    remarks = remarks.strip() if remarks else ''

    with transaction.atomic():
        update = ActivityUpdate.objects.create(
            activity=activity,
            status=status,
            remarks=remarks or None,
            updated_by=user,
        )
        activity.status = status
        activity.save(update_fields=['status', 'updated_at'])

    logger.info(
        'Activity %s marked %s by %s',
        activity.pk, status, user.email,
    )
    return update


# =============================================================================
# Queries
# =============================================================================

def _updates():
    return ActivityUpdate.objects.select_related(
        'activity', 'updated_by', 'updated_by__profile'
    ).order_by(*LATEST_FIRST)


def get_activities():
    """Activities with current_status, latest_remarks and latest_update_at annotated."""
    return Activity.objects.with_current_status().select_related(
        'created_by', 'created_by__profile'
    )


def get_activity_overview():
    """
    Every activity with its latest update only, newest activity first.

    One update row is loaded per activity, so update_count is 0 or 1 here.
    """
    activities = list(get_activities())
    latest_ids = [a.latest_update_id for a in activities if a.latest_update_id]
    return group_updates(
        _updates().filter(pk__in=latest_ids), activities=activities
    )


def get_activity_updates(activity):
    """Full update history of one activity, newest first."""
    return _updates().filter(activity=activity)


def get_recent_updates(limit: int = None):
    """Most recent updates across all activities."""
    if limit is None:
        limit = settings.RECENT_UPDATES_LIMIT
    return _updates()[:limit]


def get_daily_updates(day):
    """Updates recorded during one local calendar day, newest first."""
    start, end = day_span(day)
    return _updates().filter(updated_at__gte=start, updated_at__lte=end)


def get_dashboard_counts():
    """
    Summary numbers for the dashboard and navigation badges.

    Returns:
        dict with total_activities, completed, pending and updates_today
    """
    activities = Activity.objects.with_current_status()
    total = activities.count()
    completed = activities.filter(current_status=Status.DONE).count()

    return {
        'total_activities': total,
        'completed': completed,
        'pending': total - completed,
        'updates_today': get_daily_updates(timezone.localdate()).count(),
    }
