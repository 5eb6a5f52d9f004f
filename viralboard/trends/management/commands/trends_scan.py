"""
Management command to scan trends for keywords.

Usage:
    python manage.py trends_scan "openai" "rust"
    python manage.py trends_scan "openai" --period 1d --force-refresh
    python manage.py trends_scan "openai" --json
"""

from __future__ import annotations

import json
import logging

from django.core.management.base import BaseCommand, CommandError
from pydantic import ValidationError

from viralboard.core.enums import AnalysisDepth, Period, SourcePriority
from viralboard.trends.dto import TrendSearchConfig
from viralboard.trends.services.trends_service import build_trends_service

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Score trends for keywords (cache first, live providers on miss)"

    def add_arguments(self, parser):
        parser.add_argument("keywords", nargs="+", help="Keywords to scan")
        parser.add_argument(
            "--period",
            choices=Period.values,
            default=Period.SEVEN_DAYS.value,
            help="Time window (default: 7d)",
        )
        parser.add_argument(
            "--depth",
            choices=AnalysisDepth.values,
            default=AnalysisDepth.DETAILED.value,
            help="Analysis depth (default: detailed)",
        )
        parser.add_argument(
            "--source-priority",
            choices=SourcePriority.values,
            default=SourcePriority.ALL.value,
            help="Source family to favour (default: all)",
        )
        parser.add_argument(
            "--force-refresh",
            action="store_true",
            help="Ignore cached entries for these keywords",
        )
        parser.add_argument(
            "--predict",
            action="store_true",
            help="Also print 7-day score projections",
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Print results as JSON",
        )

    def handle(self, *args, **options):
        try:
            config = TrendSearchConfig(
                keywords=options["keywords"],
                period=options["period"],
                analysis_depth=options["depth"],
                source_priority=options["source_priority"],
            )
        except ValidationError as e:
            raise CommandError(f"Invalid search: {e}") from e

        service = build_trends_service(start_scheduler=False)
        try:
            if options["force_refresh"]:
                trends = service.force_refresh(config)
            else:
                trends = service.scrape_advanced_trends(config)
            predictions = service.generate_predictions(trends) if options["predict"] else []
        finally:
            service.close()

        if options["json"]:
            payload = {
                "trends": [trend.model_dump(mode="json") for trend in trends],
                "predictions": [prediction.model_dump(mode="json") for prediction in predictions],
            }
            self.stdout.write(json.dumps(payload, indent=2))
            return

        if not trends:
            self.stdout.write(self.style.WARNING("No trends found."))
            return

        for trend in trends:
            tags = []
            if trend.cached:
                tags.append("cached")
            if trend.is_placeholder:
                tags.append("placeholder")
            suffix = f" [{', '.join(tags)}]" if tags else ""
            direction = trend.temporal.direction if trend.temporal else "-"
            self.stdout.write(
                f"{trend.keyword}: score={trend.score:.1f} sentiment={trend.sentiment:.2f} "
                f"volume={trend.volume} growth={trend.growth_percent:+.1f}% "
                f"direction={direction} sources={','.join(trend.sources)}{suffix}"
            )

        for prediction in predictions:
            self.stdout.write(
                f"  {prediction.keyword}: {prediction.current_score:.1f} -> "
                f"{prediction.predicted_score:.1f} ({prediction.direction}, "
                f"confidence {prediction.confidence:.0%}, {prediction.timeframe})"
            )

        if any(trend.is_placeholder for trend in trends):
            self.stdout.write(
                self.style.WARNING(
                    "Some results are placeholders (live providers failed or are disabled)."
                )
            )
        else:
            self.stdout.write(self.style.SUCCESS(f"{len(trends)} trend(s) scored."))
