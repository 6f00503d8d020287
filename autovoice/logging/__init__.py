"""Markdown agent log."""
