"""flag-avatar: place a pride-flag marker on an avatar and export it."""

__version__ = "0.1.0"
