"""Command-line interface for flag-avatar."""
