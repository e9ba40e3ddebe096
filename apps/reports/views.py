"""
Views for reports app.

Includes:
- Report page (criteria form, summary, grouped results)
- CSV export for the same criteria
"""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import HttpResponse
from django.shortcuts import render, redirect

from .forms import ReportFilterForm
from .services import ReportError, build_report, generate_csv, export_filename

logger = logging.getLogger(__name__)

REPORT_FAILED = 'Failed to generate report.'


def _criteria_form(request):
    """Bind the filter form to the query string, or to today's defaults."""
    data = request.GET if request.GET.get('start_date') else ReportFilterForm.default_data()
    return ReportFilterForm(data)


@login_required
def reports_view(request):
    """
    Report generation page.

    HTMX requests receive only the results partial. When the report
    cannot be built they receive an error status, so the results already
    on screen are kept.
    """
    form = _criteria_form(request)
    report = None

    if form.is_valid():
        try:
            report = build_report(form.to_criteria())
        except ReportError as e:
            logger.warning('Report generation failed for %s: %s', request.user, e)
            if request.htmx:
                response = HttpResponse(REPORT_FAILED, status=500)
                response['HX-Reswap'] = 'none'
                return response
            messages.error(request, REPORT_FAILED)

    context = {
        'form': form,
        'report': report,
    }

    if request.htmx:
        return render(request, 'reports/partials/report_results.html', context)

    return render(request, 'reports/reports.html', context)


@login_required
def export_csv_view(request):
    """Download the report for the current criteria as CSV."""
    form = _criteria_form(request)

    if not form.is_valid():
        messages.error(request, 'Please choose a valid date range.')
        return redirect('reports:reports')

    try:
        report = build_report(form.to_criteria())
    except ReportError as e:
        logger.warning('CSV export failed for %s: %s', request.user, e)
        messages.error(request, REPORT_FAILED)
        return redirect('reports:reports')

    criteria = report.criteria
    response = HttpResponse(generate_csv(report), content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = (
        f'attachment; filename="{export_filename(criteria.start_date, criteria.end_date)}"'
    )
    return response
