"""
Shared fixtures for the activity tracker test suite.
"""

import pytest
from django.core.cache import cache
from django.utils import timezone

from apps.accounts.models import User
from apps.activities.models import Activity, ActivityUpdate


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        email='ama@example.com',
        password='s3cure-Passw0rd',
        full_name='Ama Mensah',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='kofi@example.com',
        password='s3cure-Passw0rd',
        full_name='Kofi Boateng',
    )


@pytest.fixture
def auth_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def make_activity(db, user):
    def _make(title='Daily SMS count', category=Activity.Category.MONITORING, **kwargs):
        kwargs.setdefault('created_by', user)
        return Activity.objects.create(title=title, category=category, **kwargs)
    return _make


@pytest.fixture
def make_update(db, user):
    def _make(activity, status=ActivityUpdate.Status.PENDING, updated_at=None, remarks=None, updated_by=None):
        return ActivityUpdate.objects.create(
            activity=activity,
            status=status,
            remarks=remarks,
            updated_by=updated_by or user,
            updated_at=updated_at or timezone.now(),
        )
    return _make
