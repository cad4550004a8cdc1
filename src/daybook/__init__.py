"""daybook: journal view model with media, reminders and device seams."""

__version__ = "0.1.0"
