"""Configuration and logging policy."""
