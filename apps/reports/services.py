"""
Service layer for reports app.

A report covers every update recorded in an inclusive date range, grouped
by activity, filtered by the activity's category and latest status, and
exportable as CSV.

Filtering order:
1. Date range, at query level: an update is included only if its
   updated_at lies between local start of start_date and local end of
   end_date.
2. Category and status, after grouping: a group is kept only if its
   activity's category and its latest update's status match. Older
   updates inside a kept group stay in the report even when their own
   status differs.

Services:
- day_bounds: Local start/end datetimes for a date range
- get_updates_in_range: Updates inside the date range
- filter_by_latest_state: Category/status filter on grouped results
- summarize: Summary counts for grouped results
- build_report: Run the full pipeline
- generate_csv: Serialize a report to CSV text
- export_filename: Download filename for a date range
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List

from django.db import DatabaseError
from django.utils import timezone

from apps.accounts.models import display_name
from apps.activities.aggregation import ActivityStatus, group_updates
from apps.activities.models import ActivityUpdate, Status, LATEST_FIRST
from apps.activities.services import day_span

logger = logging.getLogger(__name__)

ALL = 'all'

CSV_HEADERS = ['Activity Title', 'Category', 'Status', 'Updated By', 'Update Time', 'Remarks']
CSV_TIME_FORMAT = '%Y-%m-%d %H:%M:%S'


class ReportError(Exception):
    """Raised when a report cannot be built. No partial report is produced."""


@dataclass(frozen=True)
class ReportCriteria:
    """Inputs of a report. Dates are inclusive calendar days."""
    start_date: date
    end_date: date
    category: str = ALL
    status: str = ALL


@dataclass(frozen=True)
class ReportSummary:
    total_activities: int = 0
    completed: int = 0
    pending: int = 0
    total_updates: int = 0

    @property
    def completion_rate(self) -> float:
        if not self.total_activities:
            return 0.0
        return self.completed * 100.0 / self.total_activities


@dataclass
class Report:
    criteria: ReportCriteria
    groups: List[ActivityStatus] = field(default_factory=list)
    summary: ReportSummary = field(default_factory=ReportSummary)

    @property
    def is_empty(self) -> bool:
        return not self.groups


# =============================================================================
# Query
# =============================================================================

def day_bounds(start_date, end_date):
    """
    Inclusive datetime bounds for a date range.

    Returns:
        (start, end): start of start_date and end of end_date
        (23:59:59.999999), aware in the configured TIME_ZONE
    """
    return day_span(start_date, end_date)


def get_updates_in_range(start, end):
    """Updates with start <= updated_at <= end, newest first."""
    return ActivityUpdate.objects.select_related(
        'activity', 'updated_by', 'updated_by__profile'
    ).filter(
        updated_at__gte=start,
        updated_at__lte=end,
    ).order_by(*LATEST_FIRST)


# =============================================================================
# Grouped Results
# =============================================================================

def filter_by_latest_state(groups, category=ALL, status=ALL):
    """
    Keep groups whose activity category and latest status match.

    'all' (or an empty value) disables the corresponding filter. Only the
    latest update's status is compared; historical updates in a kept
    group are left untouched.
    """
    category = category or ALL
    status = status or ALL

    return [
        group for group in groups
        if (category == ALL or group.activity.category == category)
        and (status == ALL or group.current_status == status)
    ]


def summarize(groups) -> ReportSummary:
    """
    Summary counts over grouped results.

    completed + pending always equals total_activities; total_updates
    counts every update row in every group.
    """
    groups = list(groups)
    completed = sum(1 for g in groups if g.current_status == Status.DONE)

    return ReportSummary(
        total_activities=len(groups),
        completed=completed,
        pending=len(groups) - completed,
        total_updates=sum(g.update_count for g in groups),
    )


def build_report(criteria: ReportCriteria) -> Report:
    """
    Build a report for the given criteria.

    Raises:
        ReportError: If the updates cannot be loaded
    """
    if criteria.end_date < criteria.start_date:
        raise ReportError('End date cannot be before start date.')

    start, end = day_bounds(criteria.start_date, criteria.end_date)

    try:
        updates = list(get_updates_in_range(start, end))
    except DatabaseError as e:
        logger.exception('Failed to load updates for report %s', criteria)
        raise ReportError('Failed to generate report.') from e

    groups = filter_by_latest_state(
        group_updates(updates), criteria.category, criteria.status
    )
    summary = summarize(groups)

    logger.info(
        'Report %s..%s (category=%s, status=%s): %d activities, %d updates',
        criteria.start_date, criteria.end_date, criteria.category, criteria.status,
        summary.total_activities, summary.total_updates,
    )
    return Report(criteria=criteria, groups=groups, summary=summary)


# =============================================================================
# CSV Export
# =============================================================================

def _quoted(value):
    """
    Wrap a value in double quotes.

    Embedded double quotes are written as-is, so such a value does not
    round-trip through a CSV parser.
    """
    value = value or ''
    if '"' in value:
        logger.warning('CSV field contains an unescaped double quote: %r', value[:80])
    return f'"{value}"'


def generate_csv(report: Report) -> str:
    """
    Serialize a report: one row per update, groups in report order,
    updates newest first. Rows are separated by a bare newline.
    """
    rows = [','.join(CSV_HEADERS)]

    for group in report.groups:
        activity = group.activity
        for update in group.updates:
            rows.append(','.join([
                _quoted(activity.title),
                activity.category,
                update.status,
                display_name(update.updated_by),
                timezone.localtime(update.updated_at).strftime(CSV_TIME_FORMAT),
                _quoted(update.remarks),
            ]))

    return '\n'.join(rows)


def export_filename(start_date, end_date) -> str:
    """activity_report_<start>_to_<end>.csv with ISO dates."""
    return f'activity_report_{start_date.isoformat()}_to_{end_date.isoformat()}.csv'
