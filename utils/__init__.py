"""Shared helpers for HTTP sessions and console logging."""
