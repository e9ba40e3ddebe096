"""
Views for activities app.

Includes:
- Dashboard (counts, recent updates, activity overview, quick add)
- Activity list with filtering and pagination
- Activity create / detail
- Status updates (form and HTMX)
- Daily view of one day's updates
- HTMX partials
"""

import logging
from datetime import date, timedelta

from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied, ValidationError
from django.core.paginator import Paginator, EmptyPage, PageNotAnInteger
from django.db import DatabaseError
from django.shortcuts import render, redirect, get_object_or_404
from django.urls import reverse
from django.utils import timezone
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_POST
from django_htmx.http import HttpResponseClientRedirect

from .aggregation import group_updates
from .filters import ActivityFilter
from .forms import ActivityForm, ActivityUpdateForm
from .services import (
    create_activity, record_update,
    get_activities, get_activity_overview, get_activity_updates,
    get_recent_updates, get_daily_updates, get_dashboard_counts,
)
from .submission import (
    SubmissionGuard, SubmissionInProgress, create_scope, update_scope,
)

logger = logging.getLogger(__name__)

CREATE_FAILED = 'Failed to create activity.'
UPDATE_FAILED = 'Failed to update activity.'
ALREADY_SUBMITTING = 'This form is already being submitted. Please wait.'

# Leaves room for the previous/next day links
FIRST_DAY = date.min + timedelta(days=1)
LAST_DAY = date.max - timedelta(days=1)


# =============================================================================
# Dashboard
# =============================================================================

@login_required
def dashboard(request):
    """
    Main dashboard:
    - Summary counts (total, completed, pending, updated today)
    - Recent updates across all activities
    - Activity overview with each activity's latest status
    - Quick add activity form
    """
    context = {
        'counts': get_dashboard_counts(),
        'recent_updates': get_recent_updates(),
        'overview': get_activity_overview(),
        'form': ActivityForm(),
    }
    return render(request, 'activities/dashboard.html', context)


# =============================================================================
# Activity List
# =============================================================================

@login_required
def activity_list(request):
    """Activity management table with search, category and status filters."""
    activity_filter = ActivityFilter(request.GET or None, queryset=get_activities())
    queryset = activity_filter.qs.order_by('-created_at', '-id')

    paginator = Paginator(queryset, settings.ACTIVITY_PAGE_SIZE)
    page = request.GET.get('page', 1)

    try:
        activities = paginator.page(page)
    except PageNotAnInteger:
        activities = paginator.page(1)
    except EmptyPage:
        activities = paginator.page(paginator.num_pages)

    context = {
        'activities': activities,
        'page_obj': activities,
        'total_count': paginator.count,
        'filter': activity_filter,
        'has_active_filters': activity_filter.is_filtered,
    }

    # Handle HTMX requests - return only the table
    if request.htmx:
        return render(request, 'activities/partials/activity_list_content.html', context)

    return render(request, 'activities/activity_list.html', context)


# =============================================================================
# Create / Detail
# =============================================================================

@login_required
def activity_create(request):
    """Create a new activity. Posted from the create page or the dashboard."""
    if request.method == 'POST':
        form = ActivityForm(request.POST)
        if form.is_valid():
            guard = SubmissionGuard(
                request.user, create_scope(), form.cleaned_data.get('submission_token')
            )
            try:
                with guard.track():
                    activity = create_activity(
                        title=form.cleaned_data['title'],
                        created_by=request.user,
                        description=form.cleaned_data.get('description', ''),
                        category=form.cleaned_data.get('category'),
                    )
            except SubmissionInProgress:
                messages.info(request, ALREADY_SUBMITTING)
            except (ValidationError, PermissionDenied) as e:
                logger.warning('Activity creation failed for %s: %s', request.user, e)
                messages.error(request, CREATE_FAILED)
            except DatabaseError:
                logger.exception('Could not save activity for %s', request.user)
                messages.error(request, CREATE_FAILED)
            else:
                messages.success(request, f'Activity "{activity.title}" created successfully.')
                if request.htmx:
                    return HttpResponseClientRedirect(reverse('activities:activity_list'))
                return redirect('activities:activity_list')
    else:
        form = ActivityForm()

    context = {
        'form': form,
        'title': 'Create Activity',
        'submit_text': 'Create Activity',
    }

    if request.htmx:
        return render(request, 'activities/partials/activity_form.html', context)

    return render(request, 'activities/activity_form.html', context)


@login_required
def activity_detail(request, pk):
    """Activity details, update form and full history."""
    activity = get_object_or_404(get_activities(), pk=pk)

    return render(request, 'activities/activity_detail.html', {
        'activity': activity,
        'updates': get_activity_updates(activity),
        'form': ActivityUpdateForm(activity=activity),
    })


# =============================================================================
# Status Updates
# =============================================================================

@login_required
@require_POST
def activity_update(request, pk):
    """
    Record a status update.

    HTMX requests get the refreshed update panel (status, form and
    history); other requests are redirected back to the detail page.
    """
    activity = get_object_or_404(get_activities(), pk=pk)
    form = ActivityUpdateForm(request.POST, activity=activity)

    if form.is_valid():
        guard = SubmissionGuard(
            request.user, update_scope(activity), form.cleaned_data.get('submission_token')
        )
        try:
            with guard.track():
                record_update(
                    activity=activity,
                    user=request.user,
                    status=form.cleaned_data['status'],
                    remarks=form.cleaned_data.get('remarks') or '',
                )
        except SubmissionInProgress:
            messages.info(request, ALREADY_SUBMITTING)
        except (ValidationError, PermissionDenied) as e:
            logger.warning('Update of activity %s failed for %s: %s', pk, request.user, e)
            messages.error(request, UPDATE_FAILED)
        except DatabaseError:
            logger.exception('Could not save update of activity %s for %s', pk, request.user)
            messages.error(request, UPDATE_FAILED)
        else:
            messages.success(request, f'"{activity.title}" updated.')
            activity = get_object_or_404(get_activities(), pk=pk)
            form = ActivityUpdateForm(activity=activity)
            if not request.htmx:
                return redirect('activities:activity_detail', pk=pk)
    else:
        messages.error(request, UPDATE_FAILED)

    context = {
        'activity': activity,
        'updates': get_activity_updates(activity),
        'form': form,
    }

    if request.htmx:
        return render(request, 'activities/partials/update_panel.html', context)

    return render(request, 'activities/activity_detail.html', context)


# =============================================================================
# Daily View
# =============================================================================

@login_required
def daily_view(request):
    """
    Updates recorded on one day, grouped by activity.

    The day comes from ?date=YYYY-MM-DD and defaults to today. Days at the
    ends of the calendar are clamped so previous/next links stay valid.
    """
    today = timezone.localdate()
    try:
        day = parse_date(request.GET.get('date', ''))
    except ValueError:
        day = None
    if day is None:
        day = today
    day = min(max(day, FIRST_DAY), LAST_DAY)

    updates = list(get_daily_updates(day))

    context = {
        'day': day,
        'groups': group_updates(updates),
        'update_count': len(updates),
        'previous_day': day - timedelta(days=1),
        'next_day': day + timedelta(days=1),
        'is_today': day == today,
        'today': today,
    }

    if request.htmx:
        return render(request, 'activities/partials/daily_content.html', context)

    return render(request, 'activities/daily_view.html', context)


# =============================================================================
# HTMX Partial Views
# =============================================================================

@login_required
def partials_counts(request):
    """Dashboard summary counts (HTMX refresh)."""
    return render(request, 'activities/partials/counts.html', {
        'counts': get_dashboard_counts(),
    })
