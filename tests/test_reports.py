"""
Tests for report building and CSV export.
"""

import csv
import io
import logging
from datetime import date, timedelta

import pytest
from django.db import DatabaseError

from apps.activities.aggregation import group_updates
from apps.reports import services
from apps.reports.services import (
    ReportCriteria,
    ReportError,
    ReportSummary,
    build_report,
    day_bounds,
    export_filename,
    filter_by_latest_state,
    generate_csv,
    get_updates_in_range,
    summarize,
)

from .helpers import fake_activity, fake_update, local_dt


# =============================================================================
# Date range
# =============================================================================

def test_day_bounds_cover_full_local_days():
    start, end = day_bounds(date(2024, 3, 1), date(2024, 3, 5))

    assert start == local_dt(2024, 3, 1, 0, 0)
    assert end == local_dt(2024, 3, 5, 23, 59, 59, 999999)


def test_updates_in_range_are_inclusive(make_activity, make_update):
    activity = make_activity()
    make_update(activity, updated_at=local_dt(2024, 2, 29, 23, 59, 59, 999999))
    first = make_update(activity, updated_at=local_dt(2024, 3, 1, 0, 0))
    last = make_update(activity, updated_at=local_dt(2024, 3, 5, 23, 59, 59, 999999))
    make_update(activity, updated_at=local_dt(2024, 3, 6, 0, 0))

    start, end = day_bounds(date(2024, 3, 1), date(2024, 3, 5))

    assert list(get_updates_in_range(start, end)) == [last, first]


# =============================================================================
# Grouped results
# =============================================================================

def test_filter_by_latest_state_ignores_historical_status():
    activity = fake_activity(1, category='Security')
    t = local_dt(2024, 3, 5, 9)
    groups = group_updates([
        fake_update(1, activity, t, status='done'),
        fake_update(2, activity, t + timedelta(hours=1), status='pending'),
    ])

    assert filter_by_latest_state(groups, status='done') == []

    [kept] = filter_by_latest_state(groups, status='pending')
    assert kept.update_count == 2
    assert [u.status for u in kept.updates] == ['pending', 'done']


def test_filter_by_category():
    security, monitoring = fake_activity(1, category='Security'), fake_activity(2, category='Monitoring')
    t = local_dt(2024, 3, 5, 9)
    groups = group_updates([fake_update(1, security, t), fake_update(2, monitoring, t)])

    kept = filter_by_latest_state(groups, category='Monitoring', status='all')

    assert [g.activity for g in kept] == [monitoring]
    assert len(filter_by_latest_state(groups, category='all')) == 2
    assert len(filter_by_latest_state(groups, category='', status='')) == 2


def test_summary_counts_add_up():
    t = local_dt(2024, 3, 5, 9)
    activities = [fake_activity(pk) for pk in range(1, 5)]
    updates = [
        fake_update(1, activities[0], t, status='done'),
        fake_update(2, activities[0], t + timedelta(minutes=1), status='done'),
        fake_update(3, activities[1], t, status='pending'),
        fake_update(4, activities[2], t, status='pending'),
        fake_update(5, activities[2], t + timedelta(minutes=1), status='done'),
    ]

    summary = summarize(group_updates(updates, activities=activities))

    assert summary == ReportSummary(total_activities=4, completed=2, pending=2, total_updates=5)
    assert summary.completed + summary.pending == summary.total_activities
    assert summary.completion_rate == 50.0


def test_empty_summary():
    summary = summarize([])
    assert summary.total_activities == 0
    assert summary.completion_rate == 0.0


# =============================================================================
# build_report
# =============================================================================

@pytest.fixture
def sms_activity(make_activity, make_update):
    """Daily SMS count: pending on Mar 5, done on Mar 6."""
    activity = make_activity(title='Daily SMS count', category='Monitoring')
    make_update(activity, 'pending', updated_at=local_dt(2024, 3, 5, 9, 0))
    make_update(activity, 'done', updated_at=local_dt(2024, 3, 6, 10, 0), remarks='verified')
    return activity


def test_report_scenario_full_history(sms_activity):
    report = build_report(ReportCriteria(date(2024, 3, 5), date(2024, 3, 6)))

    [group] = report.groups
    assert group.activity == sms_activity
    assert group.current_status == 'done'
    assert group.latest_remarks == 'verified'
    assert report.summary == ReportSummary(total_activities=1, completed=1, pending=0, total_updates=2)
    assert len(generate_csv(report).split('\n')) == 3


def test_report_scenario_range_with_only_first_update(sms_activity):
    report = build_report(ReportCriteria(date(2024, 3, 5), date(2024, 3, 5)))

    assert report.summary == ReportSummary(total_activities=1, completed=0, pending=1, total_updates=1)
    rows = generate_csv(report).split('\n')
    assert len(rows) == 2
    assert rows[1].split(',')[2] == 'pending'


def test_report_filters_apply_to_latest_state(sms_activity):
    pending_only = build_report(ReportCriteria(date(2024, 3, 5), date(2024, 3, 6), status='pending'))
    done_only = build_report(ReportCriteria(date(2024, 3, 5), date(2024, 3, 6), status='done'))
    other_category = build_report(ReportCriteria(date(2024, 3, 5), date(2024, 3, 6), category='Security'))

    assert pending_only.is_empty
    assert done_only.summary.total_updates == 2
    assert other_category.is_empty


def test_report_rejects_reversed_range(db):
    with pytest.raises(ReportError):
        build_report(ReportCriteria(date(2024, 3, 6), date(2024, 3, 5)))


def test_report_wraps_database_errors(db, monkeypatch):
    def failing_query(start, end):
        raise DatabaseError('connection lost')

    monkeypatch.setattr(services, 'get_updates_in_range', failing_query)

    with pytest.raises(ReportError):
        build_report(ReportCriteria(date(2024, 3, 5), date(2024, 3, 5)))


# =============================================================================
# CSV export
# =============================================================================

def test_csv_layout(sms_activity, user):
    report = build_report(ReportCriteria(date(2024, 3, 5), date(2024, 3, 6)))

    assert generate_csv(report) == (
        'Activity Title,Category,Status,Updated By,Update Time,Remarks\n'
        '"Daily SMS count",Monitoring,done,Ama Mensah,2024-03-06 10:00:00,"verified"\n'
        '"Daily SMS count",Monitoring,pending,Ama Mensah,2024-03-05 09:00:00,""'
    )


def test_csv_round_trips_embedded_commas(make_activity, make_update):
    first = make_activity(title='Check disk, memory and CPU', category='Performance')
    second = make_activity(title='Rotate logs', category='Maintenance')
    make_update(first, 'done', updated_at=local_dt(2024, 3, 5, 8), remarks='disk 70%, memory 40%')
    make_update(first, 'pending', updated_at=local_dt(2024, 3, 5, 7))
    make_update(second, 'done', updated_at=local_dt(2024, 3, 5, 9), remarks='ok')

    report = build_report(ReportCriteria(date(2024, 3, 5), date(2024, 3, 5)))
    rows = list(csv.reader(io.StringIO(generate_csv(report))))

    assert rows[0] == ['Activity Title', 'Category', 'Status', 'Updated By', 'Update Time', 'Remarks']
    assert len(rows) == 1 + report.summary.total_updates == 4
    assert all(len(row) == 6 for row in rows)
    assert ['Check disk, memory and CPU', 'Performance', 'done', 'Ama Mensah',
            '2024-03-05 08:00:00', 'disk 70%, memory 40%'] in rows


def test_csv_embedded_quote_is_written_unescaped(make_activity, make_update, caplog):
    activity = make_activity(title='Check "prod" gateway')
    make_update(activity, 'done', updated_at=local_dt(2024, 3, 5, 8))
    report = build_report(ReportCriteria(date(2024, 3, 5), date(2024, 3, 5)))

    with caplog.at_level(logging.WARNING, logger='apps.reports.services'):
        content = generate_csv(report)

    assert '"Check "prod" gateway"' in content
    assert 'unescaped double quote' in caplog.text


def test_csv_for_update_author_without_profile(make_activity, make_update, db):
    from apps.accounts.models import User

    author = User.objects.create_user(email='no.profile@example.com', password='x')
    activity = make_activity()
    make_update(activity, 'done', updated_at=local_dt(2024, 3, 5, 8), updated_by=author)

    report = build_report(ReportCriteria(date(2024, 3, 5), date(2024, 3, 5)))

    assert ',no.profile@example.com,' in generate_csv(report)


def test_export_filename():
    assert export_filename(date(2024, 3, 1), date(2024, 3, 5)) == 'activity_report_2024-03-01_to_2024-03-05.csv'
