"""
Custom template tags and filters for activities app.

Usage in templates:
    {% load activity_tags %}

    {# Filters #}
    {{ activity.current_status|status_class }}
    {{ activity.category|category_class }}
    {{ update.updated_at|format_update_time }}
    {{ update.updated_by|display_name }}

    {# Tags #}
    {% status_badge activity %}
    {% status_badge update.status %}
    {% category_badge activity %}
"""

from django import template
from django.utils import timezone
from django.utils.html import format_html

from apps.accounts.models import display_name as user_display_name
from apps.activities.models import Category, Status

register = template.Library()

STATUS_COLORS = {
    Status.PENDING: 'bg-yellow-100 text-yellow-800',
    Status.DONE: 'bg-green-100 text-green-800',
}

CATEGORY_COLORS = {
    Category.GENERAL: 'bg-gray-100 text-gray-800',
    Category.MONITORING: 'bg-blue-100 text-blue-800',
    Category.MAINTENANCE: 'bg-amber-100 text-amber-800',
    Category.SECURITY: 'bg-red-100 text-red-800',
    Category.PERFORMANCE: 'bg-purple-100 text-purple-800',
    Category.TROUBLESHOOTING: 'bg-orange-100 text-orange-800',
}

DEFAULT_COLOR = 'bg-gray-100 text-gray-800'


def _current_status(value):
    """Accept a status string, an ActivityStatus, an annotated Activity or an update."""
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    status = getattr(value, 'current_status', None)
    if status is None:
        status = getattr(value, 'status', '')
    return status or ''


# =============================================================================
# FILTERS - Display Helpers
# =============================================================================

@register.filter
def status_class(status):
    """
    Return Tailwind CSS classes for a status.

    Usage: {{ activity.current_status|status_class }}
    """
    return STATUS_COLORS.get(_current_status(status), DEFAULT_COLOR)


@register.filter
def category_class(category):
    """
    Return Tailwind CSS classes for a category.

    Usage: {{ activity.category|category_class }}
    """
    return CATEGORY_COLORS.get(category, DEFAULT_COLOR)


@register.filter
def status_display(status):
    """
    Human label for a status value.

    Usage: {{ update.status|status_display }}
    """
    status = _current_status(status)
    if status in Status.values:
        return Status(status).label
    return status.replace('_', ' ').title() if status else ''


@register.filter
def format_update_time(value):
    """
    Format an update timestamp in local time with relative day.

    Examples:
    - "Today, 5:00 PM"
    - "Yesterday, 9:00 AM"
    - "Dec 25, 3:15 PM"
    - "Dec 25, 2023, 3:15 PM" - for other years

    Usage: {{ update.updated_at|format_update_time }}
    """
    if not value:
        return "Never"

    local = timezone.localtime(value)
    today = timezone.localdate()
    time_str = local.strftime("%-I:%M %p")

    delta_days = (today - local.date()).days

    if delta_days == 0:
        return f"Today, {time_str}"
    elif delta_days == 1:
        return f"Yesterday, {time_str}"
    elif local.year == today.year:
        return f"{local.strftime('%b %-d')}, {time_str}"
    return f"{local.strftime('%b %-d, %Y')}, {time_str}"


@register.filter
def display_name(user):
    """
    Name shown for an update author, 'Unknown' when missing.

    Usage: {{ update.updated_by|display_name }}
    """
    return user_display_name(user)


# =============================================================================
# TAGS - Badges
# =============================================================================

@register.simple_tag
def status_badge(obj):
    """
    Generate HTML badge for the current status.

    Usage: {% status_badge activity %}
    """
    status = _current_status(obj)
    if not status:
        return ''

    return format_html(
        '<span class="inline-flex items-center px-2 py-0.5 rounded text-xs font-medium {}">'
        '{}</span>',
        status_class(status), status_display(status)
    )


@register.simple_tag
def category_badge(activity):
    """
    Generate HTML badge for an activity category.

    Usage: {% category_badge activity %}
    """
    category = getattr(activity, 'category', activity)
    if not category:
        return ''

    return format_html(
        '<span class="inline-flex items-center px-2 py-0.5 rounded text-xs font-medium {}">'
        '{}</span>',
        category_class(category), category
    )
