"""
Custom middleware for accounts app.

Includes:
- HTMX login redirect middleware: turns login_required redirects into
  responses HTMX/AJAX callers can act on, so partial requests made after
  the session ended do not swap a full login page into a fragment.
"""

from urllib.parse import urlsplit

from django.conf import settings
from django.http import HttpResponse
from django.shortcuts import redirect, resolve_url


def is_ajax_or_htmx_request(request):
    """
    Check if the request is an AJAX or HTMX request.

    Returns True for:
    - HTMX requests (HX-Request header)
    - XMLHttpRequest (X-Requested-With header)
    - Fetch API requests that set Accept: application/json
    """
    # HTMX request
    if request.headers.get('HX-Request') == 'true':
        return True

    # Traditional AJAX (XMLHttpRequest)
    if request.headers.get('X-Requested-With') == 'XMLHttpRequest':
        return True

    # Fetch API with JSON accept header (but not browser navigation)
    accept = request.headers.get('Accept', '')
    if 'application/json' in accept and 'text/html' not in accept:
        return True

    return False


def get_auth_redirect_response(request, redirect_url):
    """
    Return appropriate response for auth redirects based on request type.

    - For HTMX requests: HX-Redirect header so the full page navigates
    - For AJAX requests: Return 401 with JSON
    - For normal requests: Return standard redirect
    """
    if request.headers.get('HX-Request') == 'true':
        response = HttpResponse(status=200)
        response['HX-Redirect'] = redirect_url
        return response

    elif is_ajax_or_htmx_request(request):
        return HttpResponse(
            '{"error": "Authentication required", "redirect": "' + redirect_url + '"}',
            content_type='application/json',
            status=401
        )

    return redirect(redirect_url)


class HtmxLoginRedirectMiddleware:
    """
    Rewrite redirects to the login page for HTMX/AJAX requests.

    Normal browser requests are left untouched.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        if response.status_code != 302 or not is_ajax_or_htmx_request(request):
            return response

        location = response.get('Location', '')
        login_path = resolve_url(settings.LOGIN_URL)
        if urlsplit(location).path != login_path:
            return response

        return get_auth_redirect_response(request, location)
