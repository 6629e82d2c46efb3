"""Desktop editor for flag-avatar (customtkinter)."""
