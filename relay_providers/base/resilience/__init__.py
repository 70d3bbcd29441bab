"""Resilience helpers (retry policy) for provider calls."""
