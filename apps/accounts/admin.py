"""
Admin configuration for accounts app.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .forms import AdminUserCreationForm, AdminUserChangeForm
from .models import User, Profile


class ProfileInline(admin.StackedInline):
    """Inline profile on the user edit page."""
    model = Profile
    can_delete = False
    extra = 0
    readonly_fields = ('created_at', 'updated_at')


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Custom User admin with email authentication.
    """

    add_form = AdminUserCreationForm
    form = AdminUserChangeForm

    list_display = ('email', 'full_name_display', 'is_active', 'is_staff', 'created_at')
    list_filter = ('is_active', 'is_staff')
    search_fields = ('email', 'first_name', 'last_name', 'profile__full_name')
    ordering = ('email',)
    list_per_page = 25

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Personal Info'), {'fields': ('first_name', 'last_name')}),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Important dates'), {
            'fields': ('last_login', 'created_at', 'updated_at'),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ('created_at', 'updated_at', 'last_login')
    inlines = [ProfileInline]

    def get_inlines(self, request, obj):
        """Profile is entered through add_form when creating a user."""
        return self.inlines if obj else []

    def full_name_display(self, obj):
        """Display profile name."""
        return obj.display_name
    full_name_display.short_description = 'Name'

    def get_queryset(self, request):
        """Optimize queryset with select_related."""
        return super().get_queryset(request).select_related('profile')


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin for Profile model."""

    list_display = ('full_name', 'user', 'created_at')
    search_fields = ('full_name', 'user__email')
    readonly_fields = ('created_at', 'updated_at')
