"""Facility request lifecycle core."""
