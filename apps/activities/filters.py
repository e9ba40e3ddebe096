"""
Activity filters using django-filter.

Provides filtering for the activity management list:
- Search (title, description)
- Category filter
- Current status filter (latest update, not the mirrored column)
"""

import django_filters
from django import forms
from django.db.models import Q

from .models import Activity, Category, Status

INPUT_CLASS = (
    'block w-full rounded-md border-gray-300 shadow-sm '
    'focus:border-indigo-500 focus:ring-indigo-500 sm:text-sm'
)


class ActivityFilter(django_filters.FilterSet):
    """
    Filter for the activity list.

    Expects a queryset from Activity.objects.with_current_status().

    Usage in views:
        activity_filter = ActivityFilter(request.GET or None, queryset=get_activities())
        activities = activity_filter.qs
    """

    search = django_filters.CharFilter(
        method='filter_search',
        label='Search',
        widget=forms.TextInput(attrs={
            'placeholder': 'Search activities...',
            'class': INPUT_CLASS,
        })
    )

    category = django_filters.ChoiceFilter(
        choices=Category.choices,
        label='Category',
        empty_label='All Categories',
        widget=forms.Select(attrs={'class': INPUT_CLASS}),
    )

    status = django_filters.ChoiceFilter(
        field_name='current_status',
        choices=Status.choices,
        label='Status',
        empty_label='All Statuses',
        widget=forms.Select(attrs={'class': INPUT_CLASS}),
    )

    class Meta:
        model = Activity
        fields = ['category']

    def filter_search(self, queryset, name, value):
        """Case-insensitive partial match on title and description."""
        if not value:
            return queryset

        return queryset.filter(
            Q(title__icontains=value) |
            Q(description__icontains=value)
        )

    @property
    def is_filtered(self):
        """True when any filter value is set."""
        if not self.is_bound:
            return False
        return any(self.data.get(name) for name in self.filters)
