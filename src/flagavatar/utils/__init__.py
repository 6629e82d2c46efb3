"""Shared utilities for flag-avatar."""
