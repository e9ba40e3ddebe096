"""
Latest-state aggregation for activity updates.

Turns a flat collection of ActivityUpdate rows into one ActivityStatus
per activity, exposing the activity's current (latest) state.

Functions here never touch the database: they only read attributes
already loaded on their inputs, so views and reports can pass in a
queryset that has select_related the relations they need.

Latest update:
    The update with the greatest updated_at. Two updates sharing an
    identical timestamp are ordered by primary key, the higher one wins.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .models import Status

logger = logging.getLogger(__name__)


def _recency(update):
    """Sort key ordering updates oldest to newest."""
    return (update.updated_at, update.pk or 0)


def latest_update(updates):
    """
    Return the most recent update from an iterable, or None if empty.

    Usage:
        latest = latest_update(activity.updates.all())
    """
    updates = [u for u in updates if u is not None]
    if not updates:
        return None
    return max(updates, key=_recency)


@dataclass
class ActivityStatus:
    """
    One activity together with its updates, newest first.

    An activity without updates reports a pending status and no
    remarks, author or timestamp.
    """
    activity: object
    updates: List = field(default_factory=list)

    @property
    def latest(self):
        return self.updates[0] if self.updates else None

    @property
    def current_status(self) -> str:
        latest = self.latest
        return latest.status if latest is not None else Status.PENDING

    @property
    def latest_remarks(self) -> Optional[str]:
        latest = self.latest
        return latest.remarks if latest is not None else None

    @property
    def latest_updated_by(self):
        latest = self.latest
        return latest.updated_by if latest is not None else None

    @property
    def latest_updated_at(self):
        latest = self.latest
        return latest.updated_at if latest is not None else None

    @property
    def update_count(self) -> int:
        return len(self.updates)

    @property
    def is_done(self) -> bool:
        return self.current_status == Status.DONE

    def get_current_status_display(self) -> str:
        return Status(self.current_status).label


def group_updates(updates: Iterable, activities: Optional[Iterable] = None) -> List[ActivityStatus]:
    """
    Partition updates by activity and order each group newest first.

    Args:
        updates: ActivityUpdate rows in any order
        activities: Optional activities to report on. When given, every
            activity gets a group (in the given order), including ones
            without updates, and updates for any other activity are
            skipped. When omitted, each update's own activity is used and
            groups are ordered by their latest update, newest first.

    Returns:
        List of ActivityStatus
    """
    groups = {}
    if activities is not None:
        for activity in activities:
            groups[activity.pk] = ActivityStatus(activity=activity)

    for update in updates:
        activity_id = getattr(update, 'activity_id', None)
        if activity_id is None or getattr(update, 'updated_at', None) is None:
            logger.warning(
                'Skipping malformed activity update %s (activity=%s, updated_at=%s)',
                getattr(update, 'pk', None),
                activity_id,
                getattr(update, 'updated_at', None),
            )
            continue

        group = groups.get(activity_id)
        if group is None:
            if activities is not None:
                logger.warning(
                    'Skipping update %s for unknown activity %s',
                    update.pk, activity_id,
                )
                continue
            group = groups[activity_id] = ActivityStatus(activity=update.activity)

        group.updates.append(update)

    for group in groups.values():
        group.updates.sort(key=_recency, reverse=True)

    result = list(groups.values())
    if activities is None:
        result.sort(key=lambda g: _recency(g.latest), reverse=True)
    return result
