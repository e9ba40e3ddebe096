"""
Template tags and filters for reports app.

Filters:
- format_percentage: Format as "X%" with 1 decimal place
- update_count: Format an update count as "1 update" / "N updates"
- date_range_label: Describe a report's date range

Tags:
- export_query: Query string reproducing a report's criteria

Usage:
    {% load report_tags %}

    {{ report.summary.completion_rate|format_percentage }}
    {{ group.update_count|update_count }}
    {{ report.criteria|date_range_label }}
    <a href="{% url 'reports:export_csv' %}?{% export_query report.criteria %}">
"""

from urllib.parse import urlencode

from django import template

register = template.Library()


@register.filter
def format_percentage(value, decimal_places=1):
    """
    Format a number as a percentage with specified decimal places.

    Args:
        value: Number to format (already as percentage, e.g., 85.5 for 85.5%)
        decimal_places: Number of decimal places (default 1)

    Returns:
        str: Formatted percentage like "85.5%"

    Examples:
        85.555 -> "85.6%"
        100 -> "100.0%"
        None -> "0.0%"
    """
    if value is None:
        return "0.0%"

    try:
        value = float(value)
    except (ValueError, TypeError):
        return "0.0%"

    try:
        decimal_places = int(decimal_places)
    except (ValueError, TypeError):
        decimal_places = 1

    return f"{value:.{decimal_places}f}%"


@register.filter
def update_count(count):
    """
    Examples:
        1 -> "1 update"
        3 -> "3 updates"
    """
    try:
        count = int(count)
    except (ValueError, TypeError):
        count = 0
    return f"{count} update{'' if count == 1 else 's'}"


@register.filter
def date_range_label(criteria):
    """
    Human description of a report's dates.

    Examples:
        same day  -> "Mar 5, 2024"
        range     -> "Mar 1, 2024 to Mar 5, 2024"
    """
    if criteria is None:
        return ""

    start = criteria.start_date.strftime("%b %-d, %Y")
    if criteria.start_date == criteria.end_date:
        return start
    return f"{start} to {criteria.end_date.strftime('%b %-d, %Y')}"


@register.simple_tag
def export_query(criteria):
    """Query string for the CSV export link of a report."""
    if criteria is None:
        return ""

    return urlencode({
        'start_date': criteria.start_date.isoformat(),
        'end_date': criteria.end_date.isoformat(),
        'category': criteria.category,
        'status': criteria.status,
    })
