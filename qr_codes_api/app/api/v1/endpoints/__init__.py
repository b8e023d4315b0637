"""Endpoint modules for API v1."""
