"""
Viralboard Trends Module.

Trend Intelligence Cache & Scoring Engine.

Components, leaves first:
1. Scoring: deterministic five-factor viral analysis of one content item
2. Cache: TTL cache keyed by (keyword, period, options fingerprint)
3. Capture: ContentProvider adapters for external search sources
4. Services: fetch orchestrator, aggregation, placeholders, query surface
"""
