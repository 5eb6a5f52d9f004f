"""
Trend services: orchestration, aggregation, placeholders, predictions and
the query surface.
"""

from viralboard.trends.services.orchestrator import TrendFetchOrchestrator
from viralboard.trends.services.predictions import generate_predictions
from viralboard.trends.services.trends_service import TrendsService, build_trends_service

__all__ = [
    "TrendFetchOrchestrator",
    "TrendsService",
    "build_trends_service",
    "generate_predictions",
]
