"""
Forms for activities app.

Includes:
- ActivityForm: Create a new activity
- ActivityUpdateForm: Record a status update against an activity

Both forms carry a hidden submission_token identifying the form instance
for the double-submission guard.
"""

import uuid

from django import forms
from django.core.exceptions import ValidationError

from .models import Activity, ActivityUpdate

INPUT_CLASS = (
    'block w-full rounded-md border-gray-300 shadow-sm '
    'focus:border-indigo-500 focus:ring-indigo-500 sm:text-sm'
)


class SubmissionTokenMixin(forms.Form):
    """Hidden per-instance token; a fresh one is issued for every unbound form."""

    submission_token = forms.CharField(
        required=False,
        widget=forms.HiddenInput(),
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.is_bound:
            self.fields['submission_token'].initial = uuid.uuid4().hex


class ActivityForm(SubmissionTokenMixin, forms.ModelForm):
    """
    Form for creating activities.

    Category defaults to General; status is never chosen here since
    every new activity starts as pending.
    """

    class Meta:
        model = Activity
        fields = ['title', 'description', 'category']
        widgets = {
            'title': forms.TextInput(attrs={
                'class': INPUT_CLASS,
                'placeholder': 'e.g., Daily SMS count',
            }),
            'description': forms.Textarea(attrs={
                'class': INPUT_CLASS,
                'rows': 3,
                'placeholder': 'What does this check involve?',
            }),
            'category': forms.Select(attrs={
                'class': INPUT_CLASS,
            }),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['description'].required = False
        self.fields['category'].required = False
        self.fields['category'].initial = Activity.Category.GENERAL

    def clean_title(self):
        """Reject whitespace-only titles."""
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise ValidationError("Activity title is required.")
        return title

    def clean_category(self):
        return self.cleaned_data.get('category') or Activity.Category.GENERAL


class ActivityUpdateForm(SubmissionTokenMixin, forms.ModelForm):
    """Form for recording a status update with optional remarks."""

    class Meta:
        model = ActivityUpdate
        fields = ['status', 'remarks']
        widgets = {
            'status': forms.Select(attrs={
                'class': INPUT_CLASS,
            }),
            'remarks': forms.Textarea(attrs={
                'class': INPUT_CLASS,
                'rows': 3,
                'placeholder': 'Add remarks (optional)...',
            }),
        }

    def __init__(self, *args, activity=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['remarks'].required = False
        if activity is not None and not self.is_bound:
            self.fields['status'].initial = activity.status
