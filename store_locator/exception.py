"""Error kinds raised by the location editor and its collaborators."""


class LocatorError(Exception):
    """Base error. ``message`` is safe to show to the admin user."""

    def __init__(self, message: str, detail: str = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self):
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class BackendError(LocatorError):
    """Any failure talking to the store_locations table."""


class GeocodingError(LocatorError):
    """The geocoding request itself failed (network, bad payload)."""


class NoMatchError(GeocodingError):
    """The geocoding service answered but had no usable candidate."""


class ConfigurationError(LocatorError):
    """A required credential or setting is missing."""


class ValidationError(LocatorError):
    """Input rejected before any remote call was made."""
