"""Scanning, caching and navigation."""
