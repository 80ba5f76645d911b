"""Reusable runtime helpers: transition tables and logging."""
