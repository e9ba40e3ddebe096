"""
Tests for the double-submission guard.
"""

from types import SimpleNamespace

import pytest

from apps.activities.submission import (
    SubmissionGuard,
    SubmissionInProgress,
    SubmissionState,
    create_scope,
    update_scope,
)

USER = SimpleNamespace(pk=1)
OTHER_USER = SimpleNamespace(pk=2)


def test_new_guard_is_idle():
    assert SubmissionGuard(USER, 'create', 'abc').state == SubmissionState.IDLE


def test_begin_then_settle():
    guard = SubmissionGuard(USER, 'create', 'abc')

    guard.begin()
    assert guard.state == SubmissionState.SUBMITTING

    guard.settle()
    assert guard.state == SubmissionState.SETTLED


def test_begin_while_submitting_is_rejected():
    guard = SubmissionGuard(USER, 'create', 'abc')
    guard.begin()

    with pytest.raises(SubmissionInProgress):
        SubmissionGuard(USER, 'create', 'abc').begin()

    assert guard.state == SubmissionState.SUBMITTING


def test_settled_form_can_be_submitted_again():
    guard = SubmissionGuard(USER, 'create', 'abc')
    guard.begin()
    guard.settle()

    guard.begin()
    assert guard.state == SubmissionState.SUBMITTING


def test_track_settles_even_when_the_block_fails():
    guard = SubmissionGuard(USER, update_scope(SimpleNamespace(pk=5)), 'abc')

    with pytest.raises(RuntimeError):
        with guard.track():
            assert guard.state == SubmissionState.SUBMITTING
            raise RuntimeError('backend failure')

    assert guard.state == SubmissionState.SETTLED


def test_independent_forms_do_not_block_each_other():
    SubmissionGuard(USER, update_scope(SimpleNamespace(pk=1)), 'abc').begin()

    # Different activity, different form instance, different user
    SubmissionGuard(USER, update_scope(SimpleNamespace(pk=2)), 'abc').begin()
    SubmissionGuard(USER, update_scope(SimpleNamespace(pk=1)), 'xyz').begin()
    SubmissionGuard(OTHER_USER, update_scope(SimpleNamespace(pk=1)), 'abc').begin()


def test_scopes():
    assert create_scope() == 'create'
    assert update_scope(SimpleNamespace(pk=42)) == 'update-42'


def test_in_flight_marker_expires(settings):
    settings.SUBMISSION_TIMEOUT = 0
    guard = SubmissionGuard(USER, 'create', 'abc')

    # A zero timeout expires the marker immediately
    guard.begin()
    guard.begin()
