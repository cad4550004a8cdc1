"""
Daybook exception hierarchy.

All daybook exceptions inherit from DaybookError, so host apps can catch
library-level errors while still telling specific failure modes apart.
"""


class DaybookError(Exception):
    """Base exception class for all daybook errors."""


class ConfigurationError(DaybookError):
    """Raised for configuration errors (missing keys, invalid values)."""


class InvalidEntryError(DaybookError):
    """Raised for invalid entry data (future dates, unknown fields, id clashes)."""


class AuthenticationError(DaybookError):
    """Raised when the device refuses or cannot perform authentication."""


class PermissionDeniedError(DaybookError):
    """Raised when the user has denied a device permission."""


class MediaIOError(DaybookError):
    """Raised for picker, recorder, player and print failures."""


class FileIOError(DaybookError):
    """Raised for file I/O errors."""
