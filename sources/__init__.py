"""Upstream data sources."""
