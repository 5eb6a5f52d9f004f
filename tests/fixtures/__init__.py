"""
Test fixtures for viralboard.
"""

from .trends import (
    FIXED_EPOCH,
    FailingProvider,
    FakeClock,
    FakeProvider,
    SlowProvider,
    make_raw_item,
    make_summary,
)

__all__ = [
    "FIXED_EPOCH",
    "FailingProvider",
    "FakeClock",
    "FakeProvider",
    "SlowProvider",
    "make_raw_item",
    "make_summary",
]
