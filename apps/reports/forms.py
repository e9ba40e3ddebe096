"""
Forms for reports app.

Includes:
- ReportFilterForm: date range, category and status for a report
"""

from django import forms
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.activities.models import Category, Status
from .services import ALL, ReportCriteria

INPUT_CLASS = (
    'block w-full rounded-md border-gray-300 shadow-sm '
    'focus:border-indigo-500 focus:ring-indigo-500 sm:text-sm'
)


class ReportFilterForm(forms.Form):
    """
    Report criteria.

    Both dates are inclusive and default to today.
    """

    start_date = forms.DateField(
        label='Start Date',
        widget=forms.DateInput(attrs={'type': 'date', 'class': INPUT_CLASS}),
    )
    end_date = forms.DateField(
        label='End Date',
        widget=forms.DateInput(attrs={'type': 'date', 'class': INPUT_CLASS}),
    )
    category = forms.ChoiceField(
        label='Category',
        choices=[(ALL, 'All Categories')] + list(Category.choices),
        required=False,
        widget=forms.Select(attrs={'class': INPUT_CLASS}),
    )
    status = forms.ChoiceField(
        label='Status',
        choices=[(ALL, 'All Statuses')] + list(Status.choices),
        required=False,
        widget=forms.Select(attrs={'class': INPUT_CLASS}),
    )

    @classmethod
    def default_data(cls):
        """Criteria used when the page is opened without parameters."""
        today = timezone.localdate().isoformat()
        return {
            'start_date': today,
            'end_date': today,
            'category': ALL,
            'status': ALL,
        }

    def clean(self):
        cleaned_data = super().clean()
        start_date = cleaned_data.get('start_date')
        end_date = cleaned_data.get('end_date')

        if start_date and end_date and end_date < start_date:
            self.add_error(
                'end_date',
                ValidationError('End date cannot be before start date.', code='invalid_range'),
            )
        return cleaned_data

    def to_criteria(self) -> ReportCriteria:
        """Build ReportCriteria from cleaned data."""
        return ReportCriteria(
            start_date=self.cleaned_data['start_date'],
            end_date=self.cleaned_data['end_date'],
            category=self.cleaned_data.get('category') or ALL,
            status=self.cleaned_data.get('status') or ALL,
        )
