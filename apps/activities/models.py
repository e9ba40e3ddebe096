"""
Activity tracking models.

Models:
- Activity: A recurring operational check owned by the support team
- ActivityUpdate: Immutable, timestamped status/remarks entry against one activity

Current status of an activity is the status of its most recent update
(ordered by updated_at, then id), or pending when it has none.
Activity.status mirrors that value and is written in the same
transaction as each update.
"""

from django.db import models
from django.db.models import OuterRef, Subquery, Value
from django.db.models.functions import Coalesce
from django.conf import settings
from django.utils import timezone
from django.core.exceptions import ValidationError


class Category(models.TextChoices):
    GENERAL = 'General', 'General'
    MONITORING = 'Monitoring', 'Monitoring'
    MAINTENANCE = 'Maintenance', 'Maintenance'
    SECURITY = 'Security', 'Security'
    PERFORMANCE = 'Performance', 'Performance'
    TROUBLESHOOTING = 'Troubleshooting', 'Troubleshooting'


class Status(models.TextChoices):
    PENDING = 'pending', 'Pending'
    DONE = 'done', 'Done'


# Newest first; id breaks ties between identical timestamps
LATEST_FIRST = ('-updated_at', '-id')


class ActivityQuerySet(models.QuerySet):

    def with_current_status(self):
        """
        Annotate each activity with the status, remarks, time and id of
        its latest update. Activities without updates get 'pending'.
        """
        latest = ActivityUpdate.objects.filter(
            activity=OuterRef('pk')
        ).order_by(*LATEST_FIRST)

        return self.annotate(
            current_status=Coalesce(
                Subquery(latest.values('status')[:1]),
                Value(Status.PENDING.value),
                output_field=models.CharField(),
            ),
            latest_remarks=Subquery(latest.values('remarks')[:1]),
            latest_update_at=Subquery(latest.values('updated_at')[:1]),
            latest_update_id=Subquery(latest.values('pk')[:1]),
        )


class Activity(models.Model):
    """
    Main Activity model.

    Created as pending; each status change is recorded as a new
    ActivityUpdate row.
    """

    Category = Category
    Status = Status

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.GENERAL,
        db_index=True,
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
        help_text='Mirror of the latest update status'
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='created_activities',
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ActivityQuerySet.as_manager()

    class Meta:
        db_table = 'activities'
        verbose_name = 'activity'
        verbose_name_plural = 'activities'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['category', 'status'], name='activities_categor_5a1e0c_idx'),
        ]

    def __str__(self):
        return self.title

    def clean(self):
        if not self.title or not self.title.strip():
            raise ValidationError({'title': 'Activity title is required.'})
        if self.status not in Status.values:
            raise ValidationError({'status': f'Invalid status: {self.status}'})

    @property
    def is_done(self):
        return self.status == Status.DONE


class ActivityUpdate(models.Model):
    """
    Append-only status history for an activity.

    Rows are never edited or deleted individually; they disappear only
    when their activity is deleted.
    """

    Status = Status

    activity = models.ForeignKey(
        Activity,
        on_delete=models.CASCADE,
        related_name='updates',
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
    )
    remarks = models.TextField(blank=True, null=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='activity_updates',
    )
    updated_at = models.DateTimeField(
        default=timezone.now,
        editable=False,
        db_index=True,
    )

    class Meta:
        db_table = 'activity_updates'
        verbose_name = 'activity update'
        verbose_name_plural = 'activity updates'
        ordering = list(LATEST_FIRST)
        indexes = [
            models.Index(fields=['activity', '-updated_at'], name='activity_up_activit_3c9b2e_idx'),
            models.Index(fields=['updated_by', '-updated_at'], name='activity_up_updated_8d41f7_idx'),
        ]

    def __str__(self):
        return f"{self.activity.title} - {self.get_status_display()} by {self.updated_by}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError('Activity updates are immutable.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError('Activity updates cannot be deleted.')

    @property
    def is_done(self):
        return self.status == Status.DONE
