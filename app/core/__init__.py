"""Configuration and logging for the facility request core."""
