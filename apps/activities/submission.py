"""
Double-submission guard for activity forms.

Each form instance carries a random submission_token. While a POST for
that (user, scope, token) is being processed, a second POST of the same
form is refused instead of being processed in parallel.

States:
    idle        -> begin()  -> submitting
    submitting  -> settle() -> settled
    settled     -> begin()  -> submitting
    submitting  -> begin()  -> SubmissionInProgress

Once a submission has settled the same form may be submitted again;
sequential resubmission still records a second row.

The in-flight marker is stored in the Django cache with cache.add, which
is atomic on every cache backend, and expires after SUBMISSION_TIMEOUT
seconds so a crashed request cannot lock a form forever.
"""

import logging
from contextlib import contextmanager

from django.conf import settings
from django.core.cache import cache
from django.db import models

logger = logging.getLogger(__name__)


class SubmissionState(models.TextChoices):
    IDLE = 'idle', 'Idle'
    SUBMITTING = 'submitting', 'Submitting'
    SETTLED = 'settled', 'Settled'


class SubmissionInProgress(Exception):
    """Raised when the same form is submitted while a previous POST is running."""


def create_scope():
    return 'create'


def update_scope(activity):
    return f'update-{activity.pk}'


class SubmissionGuard:
    """
    Per form instance submission state.

    Usage:
        guard = SubmissionGuard(request.user, update_scope(activity), token)
        with guard.track():
            record_update(...)
    """

    def __init__(self, user, scope, token=None):
        self.scope = scope
        base = f'submission:{getattr(user, "pk", None) or "anon"}:{scope}:{token or "-"}'
        self._inflight_key = f'{base}:inflight'
        self._settled_key = f'{base}:settled'

    @property
    def timeout(self):
        return getattr(settings, 'SUBMISSION_TIMEOUT', 60)

    @property
    def state(self):
        if cache.get(self._inflight_key) is not None:
            return SubmissionState.SUBMITTING
        if cache.get(self._settled_key) is not None:
            return SubmissionState.SETTLED
        return SubmissionState.IDLE

    def begin(self):
        """Move to submitting. Raises SubmissionInProgress if already submitting."""
        if not cache.add(self._inflight_key, SubmissionState.SUBMITTING.value, self.timeout):
            logger.warning('Rejected duplicate submission for %s', self._inflight_key)
            raise SubmissionInProgress('This form is already being submitted.')

    def settle(self):
        """Move from submitting to settled."""
        cache.set(self._settled_key, SubmissionState.SETTLED.value, self.timeout)
        cache.delete(self._inflight_key)

    @contextmanager
    def track(self):
        """Hold the submitting state for the duration of the block."""
        self.begin()
        try:
            yield self
        finally:
            self.settle()
