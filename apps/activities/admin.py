"""
Admin configuration for activities app.
"""

from django.contrib import admin
from django.utils.html import format_html

from .models import Activity, ActivityUpdate

STATUS_COLORS = {
    'pending': '#FFA500',  # Orange
    'done': '#27ae60',     # Green
}


def _status_html(status, label):
    return format_html(
        '<span style="color: {}; font-weight: bold;">{}</span>',
        STATUS_COLORS.get(status, '#000'), label
    )


class ActivityUpdateInline(admin.TabularInline):
    """Read-only update history on the activity page."""
    model = ActivityUpdate
    extra = 0
    fields = ('updated_at', 'status', 'remarks', 'updated_by')
    readonly_fields = fields
    ordering = ('-updated_at', '-id')
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    """Admin for Activity model."""

    list_display = (
        'title', 'category', 'status_display', 'created_by', 'created_at', 'updated_at'
    )
    list_filter = ('category', 'status', 'created_at')
    search_fields = ('title', 'description')
    ordering = ('-created_at',)
    date_hierarchy = 'created_at'

    # Status follows the latest update and is never edited directly
    readonly_fields = ('status', 'created_by', 'created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('title', 'description', 'category')
        }),
        ('Status', {
            'fields': ('status',)
        }),
        ('Timestamps', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    inlines = [ActivityUpdateInline]

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('created_by', 'created_by__profile')

    def save_model(self, request, obj, form, change):
        if not change:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)

    def status_display(self, obj):
        """Display status with color coding."""
        return _status_html(obj.status, obj.get_status_display())
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'


@admin.register(ActivityUpdate)
class ActivityUpdateAdmin(admin.ModelAdmin):
    """Admin for ActivityUpdate model. Updates are append-only."""

    list_display = (
        'activity', 'status_display', 'updated_by', 'remarks_preview', 'updated_at'
    )
    list_filter = ('status', 'updated_at', 'activity__category')
    search_fields = (
        'activity__title', 'remarks',
        'updated_by__email', 'updated_by__profile__full_name'
    )
    ordering = ('-updated_at', '-id')
    date_hierarchy = 'updated_at'

    readonly_fields = ('activity', 'status', 'remarks', 'updated_by', 'updated_at')

    def remarks_preview(self, obj):
        """Show truncated remarks."""
        remarks = obj.remarks or ''
        return remarks[:80] + '...' if len(remarks) > 80 else remarks
    remarks_preview.short_description = 'Remarks'

    def status_display(self, obj):
        return _status_html(obj.status, obj.get_status_display())
    status_display.short_description = 'Status'
    status_display.admin_order_field = 'status'

    def has_add_permission(self, request):
        """Updates are recorded through the application only."""
        return False

    def has_change_permission(self, request, obj=None):
        """Prevent editing of updates."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Prevent deletion of updates."""
        return False

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related(
            'activity', 'updated_by', 'updated_by__profile'
        )
