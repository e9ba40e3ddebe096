"""
Test helpers shared across modules.
"""

from datetime import datetime
from types import SimpleNamespace

from django.utils import timezone


def local_dt(year, month, day, hour=0, minute=0, second=0, microsecond=0):
    """Aware datetime in the configured TIME_ZONE."""
    return timezone.make_aware(
        datetime(year, month, day, hour, minute, second, microsecond),
        timezone.get_current_timezone(),
    )


def fake_activity(pk, title='Activity', category='General'):
    return SimpleNamespace(pk=pk, id=pk, title=title, category=category)


def fake_update(pk, activity, updated_at, status='pending', remarks=None, updated_by=None):
    """Stand-in for an ActivityUpdate row with its relations loaded."""
    return SimpleNamespace(
        pk=pk,
        id=pk,
        activity=activity,
        activity_id=activity.pk if activity is not None else None,
        updated_at=updated_at,
        status=status,
        remarks=remarks,
        updated_by=updated_by,
    )
