"""
Context processors for activities app.

Provides dashboard counts for navigation badges and the signed-in
user's display name.
"""


def activity_counts(request):
    """
    Add activity counts to template context for navigation badges.

    Returns:
        - pending_activity_count: Activities whose latest status is pending
        - updates_today_count: Updates recorded today
    """
    context = {
        'pending_activity_count': 0,
        'updates_today_count': 0,
    }

    if not request.user.is_authenticated:
        return context

    from apps.activities.services import get_dashboard_counts

    counts = get_dashboard_counts()
    context['pending_activity_count'] = counts['pending']
    context['updates_today_count'] = counts['updates_today']
    return context


def current_profile(request):
    """
    Add the signed-in user's display name.

    Falls back to the email address when no profile exists.
    """
    if not request.user.is_authenticated:
        return {'current_user_name': ''}

    return {'current_user_name': request.user.display_name}
