"""
Tests for activity and report template tags.
"""

from datetime import date, timedelta
from types import SimpleNamespace

from django.utils import timezone

from apps.activities.aggregation import ActivityStatus
from apps.activities.templatetags import activity_tags
from apps.reports.services import ReportCriteria
from apps.reports.templatetags import report_tags

from .helpers import fake_activity, fake_update


# =============================================================================
# activity_tags
# =============================================================================

def test_status_class():
    assert activity_tags.status_class('done') == 'bg-green-100 text-green-800'
    assert activity_tags.status_class('pending') == 'bg-yellow-100 text-yellow-800'
    assert activity_tags.status_class('unknown') == 'bg-gray-100 text-gray-800'


def test_status_badge_reads_current_status_from_group():
    activity = fake_activity(1)
    group = ActivityStatus(activity=activity, updates=[
        fake_update(1, activity, timezone.now(), status='done'),
    ])

    badge = activity_tags.status_badge(group)

    assert 'Done' in badge
    assert 'bg-green-100' in badge


def test_status_badge_for_plain_status_and_missing_value():
    assert 'Pending' in activity_tags.status_badge('pending')
    assert activity_tags.status_badge(None) == ''


def test_category_badge():
    badge = activity_tags.category_badge(SimpleNamespace(category='Security'))

    assert 'Security' in badge
    assert 'bg-red-100' in badge


def test_display_name_filter():
    assert activity_tags.display_name(None) == 'Unknown'
    assert activity_tags.display_name(SimpleNamespace(display_name='Ama Mensah')) == 'Ama Mensah'


def test_format_update_time():
    now = timezone.localtime()

    assert activity_tags.format_update_time(None) == 'Never'
    assert activity_tags.format_update_time(now).startswith('Today, ')
    assert activity_tags.format_update_time(now - timedelta(days=1)).startswith('Yesterday, ')
    assert activity_tags.format_update_time(now - timedelta(days=800)).endswith(
        (now - timedelta(days=800)).strftime('%Y') + ', ' + (now - timedelta(days=800)).strftime('%-I:%M %p')
    )


# =============================================================================
# report_tags
# =============================================================================

def test_format_percentage():
    assert report_tags.format_percentage(85.555) == '85.6%'
    assert report_tags.format_percentage(None) == '0.0%'
    assert report_tags.format_percentage('abc') == '0.0%'
    assert report_tags.format_percentage(50, 0) == '50%'


def test_update_count():
    assert report_tags.update_count(1) == '1 update'
    assert report_tags.update_count(3) == '3 updates'
    assert report_tags.update_count(None) == '0 updates'


def test_date_range_label():
    assert report_tags.date_range_label(ReportCriteria(date(2024, 3, 5), date(2024, 3, 5))) == 'Mar 5, 2024'
    assert report_tags.date_range_label(
        ReportCriteria(date(2024, 3, 1), date(2024, 3, 5))
    ) == 'Mar 1, 2024 to Mar 5, 2024'


def test_export_query():
    query = report_tags.export_query(ReportCriteria(date(2024, 3, 1), date(2024, 3, 5), 'Security', 'done'))

    assert query == 'start_date=2024-03-01&end_date=2024-03-05&category=Security&status=done'
