"""Configuration and logging for the support center API."""
