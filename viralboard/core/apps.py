"""
Django app configuration for viralboard core.
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "viralboard.core"
    verbose_name = "Viralboard Core"
