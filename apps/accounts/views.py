"""
Views for accounts app.

Includes:
- Landing page
- Authentication views (login, logout)
- Sign-up and sign-up success
"""

import logging

from django.shortcuts import render, redirect
from django.contrib.auth import login, logout
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.utils.http import url_has_allowed_host_and_scheme

from .forms import LoginForm, SignUpForm

logger = logging.getLogger(__name__)


def home_view(request):
    """
    Public landing page.
    Signed-in users go straight to the dashboard.
    """
    if request.user.is_authenticated:
        return redirect('activities:dashboard')

    return render(request, 'accounts/home.html')


# =============================================================================
# Authentication Views
# =============================================================================

def login_view(request):
    """Email/password sign-in."""
    if request.user.is_authenticated:
        return redirect('activities:dashboard')

    if request.method == 'POST':
        form = LoginForm(request, data=request.POST)
        if form.is_valid():
            user = form.get_user()
            login(request, user, backend='apps.accounts.backends.EmailAuthBackend')

            messages.success(request, f'Welcome back, {user.get_short_name()}!')

            # Redirect to next URL or dashboard
            next_url = request.POST.get('next') or request.GET.get('next')
            if next_url and url_has_allowed_host_and_scheme(
                next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
            ):
                return redirect(next_url)
            return redirect('activities:dashboard')
    else:
        form = LoginForm(request)

    return render(request, 'accounts/login.html', {
        'form': form,
        'next': request.GET.get('next', ''),
    })


@login_required
def logout_view(request):
    """Log out the user and redirect to login page."""
    logout(request)
    messages.success(request, 'You have been logged out successfully.')
    return redirect('accounts:login')


# =============================================================================
# Sign-up Views
# =============================================================================

def signup_view(request):
    """
    Self-service account creation.
    Creates the user and their profile, then shows the success page.
    """
    if request.user.is_authenticated:
        return redirect('activities:dashboard')

    if request.method == 'POST':
        form = SignUpForm(request.POST)
        if form.is_valid():
            user = form.save()
            logger.info('Account created for %s', user.email)
            return redirect('accounts:signup_success')
    else:
        form = SignUpForm()

    return render(request, 'accounts/signup.html', {'form': form})


def signup_success_view(request):
    """Confirmation page shown after sign-up."""
    return render(request, 'accounts/signup_success.html')
