"""Observability module."""
