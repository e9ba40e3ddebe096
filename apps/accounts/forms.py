"""
Forms for accounts app.

Includes:
- LoginForm: email + password sign-in
- SignUpForm: self-service account creation with profile display name
- AdminUserCreationForm / AdminUserChangeForm: admin user management
"""

from django import forms
from django.contrib.auth import get_user_model, authenticate, password_validation
from django.contrib.auth.forms import UserCreationForm, UserChangeForm
from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

from .models import Profile

User = get_user_model()

INPUT_CLASS = (
    'mt-1 block w-full px-3 py-2 border border-gray-300 rounded-md '
    'shadow-sm focus:outline-none focus:ring-blue-500 '
    'focus:border-blue-500 sm:text-sm'
)


class LoginForm(forms.Form):
    """
    Login form with email and password.

    On success the authenticated user is available through get_user().
    """

    email = forms.EmailField(
        label=_('Email Address'),
        max_length=254,
        widget=forms.EmailInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'you@example.com',
            'autofocus': True,
        })
    )

    password = forms.CharField(
        label=_('Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'Password',
        })
    )

    def __init__(self, request=None, *args, **kwargs):
        self.request = request
        self.user_cache = None
        super().__init__(*args, **kwargs)

    def clean_email(self):
        return self.cleaned_data.get('email', '').lower().strip()

    def clean(self):
        """Validate credentials."""
        email = self.cleaned_data.get('email')
        password = self.cleaned_data.get('password')

        if email and password:
            self.user_cache = authenticate(
                self.request,
                username=email,
                password=password
            )

            if self.user_cache is None:
                raise ValidationError(
                    _('Invalid email or password. Please try again.'),
                    code='invalid_login',
                )

        return self.cleaned_data

    def get_user(self):
        """Return the authenticated user."""
        return self.user_cache


class SignUpForm(forms.Form):
    """
    Create a new support team account.

    The full name becomes the profile display name used in activity
    history and report exports.
    """

    full_name = forms.CharField(
        label=_('Full Name'),
        max_length=150,
        widget=forms.TextInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'e.g., Ama Mensah',
            'autofocus': True,
        })
    )

    email = forms.EmailField(
        label=_('Email Address'),
        max_length=254,
        widget=forms.EmailInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'you@example.com',
        })
    )

    password = forms.CharField(
        label=_('Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': INPUT_CLASS,
            'autocomplete': 'new-password',
        }),
    )

    confirm_password = forms.CharField(
        label=_('Confirm Password'),
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': INPUT_CLASS,
            'autocomplete': 'new-password',
        })
    )

    def clean_full_name(self):
        full_name = self.cleaned_data.get('full_name', '').strip()
        if not full_name:
            raise ValidationError(_('Full name is required.'), code='required')
        return full_name

    def clean_email(self):
        """Reject emails that already have an account."""
        email = self.cleaned_data.get('email', '').lower().strip()
        if User.objects.filter(email__iexact=email).exists():
            raise ValidationError(
                _('A user with that email already exists.'),
                code='duplicate_email',
            )
        return email

    def clean(self):
        """Verify passwords match and pass the configured validators."""
        cleaned_data = super().clean()
        password = cleaned_data.get('password')
        confirm_password = cleaned_data.get('confirm_password')

        if password and confirm_password:
            if password != confirm_password:
                self.add_error(
                    'confirm_password',
                    ValidationError(
                        _('The two password fields do not match.'),
                        code='password_mismatch',
                    )
                )
            else:
                candidate = User(email=cleaned_data.get('email', ''))
                try:
                    password_validation.validate_password(password, candidate)
                except ValidationError as e:
                    self.add_error('password', e)

        return cleaned_data

    def save(self):
        """Create the user together with their profile."""
        return User.objects.create_user(
            email=self.cleaned_data['email'],
            password=self.cleaned_data['password'],
            full_name=self.cleaned_data['full_name'],
        )


class AdminUserCreationForm(UserCreationForm):
    """
    Form for admin to create new users.

    Creates the profile alongside when a full name is entered.
    """

    full_name = forms.CharField(label=_('Full Name'), max_length=150, required=False)

    class Meta:
        model = User
        fields = ('email',)

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower().strip()
        if email and User.objects.filter(email__iexact=email).exists():
            raise ValidationError(
                _('A user with that email already exists.'),
                code='duplicate_email',
            )
        return email

    def save(self, commit=True):
        user = super().save(commit=commit)
        full_name = self.cleaned_data.get('full_name', '').strip()
        if commit and full_name:
            Profile.objects.create(user=user, full_name=full_name)
        return user


class AdminUserChangeForm(UserChangeForm):
    """Form for admin to edit existing users."""

    class Meta:
        model = User
        fields = ('email', 'first_name', 'last_name', 'is_active')

    def clean_email(self):
        email = self.cleaned_data.get('email', '').lower().strip()
        existing = User.objects.filter(email__iexact=email).exclude(pk=self.instance.pk)
        if existing.exists():
            raise ValidationError(
                _('A user with that email already exists.'),
                code='duplicate_email',
            )
        return email
