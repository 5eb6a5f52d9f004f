"""Django app configuration for trends module."""

from django.apps import AppConfig


class TrendsConfig(AppConfig):
    """Configuration for the trends app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "viralboard.trends"
    verbose_name = "Trend Intelligence"
