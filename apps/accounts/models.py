"""
Custom User and Profile models for activity_tracker.

CRITICAL: This file must be created and AUTH_USER_MODEL set before running
any migrations. Changing the User model after migrations is very complex.

Profile is the read-only reference record (display name) that activity
updates and reports show next to each entry.
"""

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.conf import settings
from django.db import models


class UserManager(BaseUserManager):
    """
    Custom user manager where email is the unique identifier
    for authentication instead of username.
    """

    def create_user(self, email, password=None, full_name='', **extra_fields):
        """
        Create and save a regular user with the given email and password.

        A Profile row is created alongside when full_name is given.
        """
        if not email:
            raise ValueError('The Email field must be set')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        if full_name and full_name.strip():
            Profile.objects.using(self._db).create(user=user, full_name=full_name.strip())
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a SuperUser with the given email and password."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    Support team member. Signs in with email address.
    """

    # Remove username field, use email instead
    username = None
    email = models.EmailField(
        'email address',
        unique=True,
        error_messages={
            'unique': 'A user with that email already exists.',
        },
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = 'user'
        verbose_name_plural = 'users'
        ordering = ['email']

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        """Profile full name, then first/last name, then email."""
        profile = getattr(self, 'profile', None)
        if profile is not None and profile.full_name:
            return profile.full_name
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.email

    def get_short_name(self):
        """Return the short name for the user."""
        return self.display_name.split(' ')[0] if self.display_name else self.email


class Profile(models.Model):
    """
    Display information for an authenticated user.

    The primary key is the user itself, so a profile id always matches
    the identity returned by authentication.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='profile',
    )
    full_name = models.CharField(max_length=150)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'profiles'
        verbose_name = 'profile'
        verbose_name_plural = 'profiles'
        ordering = ['full_name']

    def __str__(self):
        return self.full_name


def display_name(user):
    """
    Name shown for a user in lists, history and CSV exports.

    Accepts None (deleted or unknown author) and returns 'Unknown'.
    """
    if user is None:
        return 'Unknown'
    return user.display_name
