"""
Tests for latest-state aggregation.

These run without a database: updates are plain objects carrying the
attributes aggregation reads.
"""

import logging
import random
from datetime import timedelta

from apps.activities.aggregation import ActivityStatus, group_updates, latest_update

from .helpers import fake_activity, fake_update, local_dt


# =============================================================================
# latest_update
# =============================================================================

def test_latest_update_picks_greatest_timestamp_regardless_of_order():
    activity = fake_activity(1)
    t = local_dt(2024, 3, 5, 9)
    older = fake_update(1, activity, t)
    newest = fake_update(2, activity, t + timedelta(hours=2))
    middle = fake_update(3, activity, t + timedelta(hours=1))

    assert latest_update([older, newest, middle]) is newest
    assert latest_update([middle, older, newest]) is newest


def test_latest_update_equal_timestamps_highest_id_wins():
    activity = fake_activity(1)
    t = local_dt(2024, 3, 5, 9)
    first = fake_update(10, activity, t, status='pending')
    second = fake_update(11, activity, t, status='done')

    assert latest_update([second, first]) is second
    assert latest_update([first, second]) is second


def test_latest_update_of_nothing_is_none():
    assert latest_update([]) is None


# =============================================================================
# group_updates
# =============================================================================

def test_scenario_latest_update_drives_current_status():
    activity = fake_activity(1, title='Daily SMS count', category='Monitoring')
    t1 = local_dt(2024, 3, 5, 9)
    update_a = fake_update(1, activity, t1, status='pending')
    update_b = fake_update(2, activity, t1 + timedelta(hours=1), status='done', remarks='verified')

    [group] = group_updates([update_a, update_b])

    assert group.activity is activity
    assert group.current_status == 'done'
    assert group.latest_remarks == 'verified'
    assert group.update_count == 2
    assert group.updates == [update_b, update_a]
    assert group.is_done


def test_activity_without_updates_is_pending():
    activity = fake_activity(7)

    [group] = group_updates([], activities=[activity])

    assert group.current_status == 'pending'
    assert group.latest is None
    assert group.latest_remarks is None
    assert group.latest_updated_by is None
    assert group.latest_updated_at is None
    assert group.update_count == 0
    assert not group.is_done


def test_supplied_activities_keep_their_order():
    first, second, third = fake_activity(3), fake_activity(1), fake_activity(2)
    t = local_dt(2024, 3, 5, 9)
    updates = [
        fake_update(1, second, t + timedelta(hours=3), status='done'),
        fake_update(2, third, t),
    ]

    groups = group_updates(updates, activities=[first, second, third])

    assert [g.activity for g in groups] == [first, second, third]
    assert [g.current_status for g in groups] == ['pending', 'done', 'pending']


def test_groups_without_activities_ordered_by_latest_update():
    old, recent = fake_activity(1), fake_activity(2)
    t = local_dt(2024, 3, 5, 9)
    updates = [
        fake_update(1, old, t),
        fake_update(2, recent, t + timedelta(minutes=5)),
        fake_update(3, old, t + timedelta(minutes=1)),
    ]

    groups = group_updates(updates)

    assert [g.activity for g in groups] == [recent, old]


def test_update_for_unknown_activity_is_skipped_with_warning(caplog):
    known, unknown = fake_activity(1), fake_activity(99)
    t = local_dt(2024, 3, 5, 9)
    updates = [
        fake_update(1, known, t, status='done'),
        fake_update(2, unknown, t + timedelta(hours=1)),
    ]

    with caplog.at_level(logging.WARNING, logger='apps.activities.aggregation'):
        groups = group_updates(updates, activities=[known])

    assert len(groups) == 1
    assert groups[0].update_count == 1
    assert 'unknown activity 99' in caplog.text


def test_malformed_updates_are_skipped(caplog):
    activity = fake_activity(1)
    t = local_dt(2024, 3, 5, 9)
    good = fake_update(1, activity, t)
    no_time = fake_update(2, activity, None)
    no_activity = fake_update(3, None, t)

    with caplog.at_level(logging.WARNING, logger='apps.activities.aggregation'):
        groups = group_updates([good, no_time, no_activity])

    assert len(groups) == 1
    assert groups[0].updates == [good]
    assert caplog.text.count('Skipping malformed') == 2


def test_group_status_matches_max_timestamp_update():
    rng = random.Random(20240305)
    activities = [fake_activity(pk) for pk in range(1, 6)]
    base = local_dt(2024, 3, 1)

    updates = []
    for pk in range(1, 60):
        activity = rng.choice(activities)
        updated_at = base + timedelta(minutes=rng.randint(0, 500))
        updates.append(fake_update(pk, activity, updated_at, status=rng.choice(['pending', 'done'])))
    rng.shuffle(updates)

    groups = group_updates(updates, activities=activities)

    for group in groups:
        own = [u for u in updates if u.activity_id == group.activity.pk]
        if not own:
            assert group.current_status == 'pending'
            continue
        expected = max(own, key=lambda u: (u.updated_at, u.pk))
        assert group.current_status == expected.status
        assert group.latest is expected
        assert group.update_count == len(own)


def test_activity_status_display_label():
    group = ActivityStatus(activity=fake_activity(1))
    assert group.get_current_status_display() == 'Pending'
