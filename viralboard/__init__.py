"""
Viralboard trends backend.

Trend intelligence for the carousel dashboard: a TTL cache in front of
multi-source content collection, a viral-potential scoring engine, and the
orchestrator that merges cached and fresh trend summaries.
"""
