"""Exceptions raised by the content tools integration."""
from django.core.exceptions import ImproperlyConfigured


class ConfigurationError(ImproperlyConfigured):
    """
    Raised when an editable region is configured incorrectly.

    These are integration mistakes, so they surface at render time and are
    never recovered from.
    """

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f'Invalid {field} configuration!')
