"""
Management command to inspect and maintain the trend cache snapshot.

Usage:
    python manage.py trends_cache stats
    python manage.py trends_cache export
    python manage.py trends_cache cleanup
    python manage.py trends_cache invalidate --keyword openai [--period 7d]
    python manage.py trends_cache clear
"""

from __future__ import annotations

import logging

from django.core.management.base import BaseCommand, CommandError

from viralboard.core.enums import Period
from viralboard.trends.services.trends_service import build_trends_service

logger = logging.getLogger(__name__)

ACTIONS = ("stats", "export", "clear", "cleanup", "invalidate")


class Command(BaseCommand):
    help = "Inspect or maintain the persisted trend cache"

    def add_arguments(self, parser):
        parser.add_argument("action", choices=ACTIONS, help="Operation to run")
        parser.add_argument("--keyword", help="Keyword for invalidate")
        parser.add_argument(
            "--period",
            choices=Period.values,
            help="Restrict invalidate to one period",
        )

    def handle(self, *args, **options):
        action = options["action"]
        if action == "invalidate" and not options.get("keyword"):
            raise CommandError("invalidate requires --keyword")

        service = build_trends_service(start_scheduler=False)
        try:
            if action == "stats":
                stats = service.get_cache_stats()
                self.stdout.write(f"Entries:  {stats.total_entries} ({stats.expired_entries} expired)")
                self.stdout.write(f"Hits:     {stats.hits}")
                self.stdout.write(f"Misses:   {stats.misses}")
                self.stdout.write(f"Hit rate: {stats.hit_rate_percent:.2f}%")
                self.stdout.write(f"Size:     {stats.size_display}")
                if stats.oldest_entry:
                    self.stdout.write(f"Oldest:   {stats.oldest_entry.isoformat()}")
                    self.stdout.write(f"Newest:   {stats.newest_entry.isoformat()}")

            elif action == "export":
                self.stdout.write(service.export_cache().model_dump_json(indent=2))

            elif action == "clear":
                service.clear_cache()
                self.stdout.write(self.style.SUCCESS("Cache cleared."))

            elif action == "cleanup":
                removed = service.cleanup_cache()
                self.stdout.write(self.style.SUCCESS(f"Removed {removed} expired entries."))

            elif action == "invalidate":
                removed = service.invalidate_cache(options["keyword"], options.get("period"))
                self.stdout.write(
                    self.style.SUCCESS(f"Invalidated {removed} entries for '{options['keyword']}'.")
                )
        finally:
            service.close()
