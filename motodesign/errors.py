class MotodesignError(Exception):
    """Base class for errors raised by the listings backend."""


class ConfigurationError(MotodesignError):
    """A required server-side secret is missing. Never retried."""


class FetchError(MotodesignError):
    """Fetching records through the proxy boundary failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(FetchError):
    """Non-success status or malformed body from the record store."""


class TransportError(FetchError):
    """The proxy boundary could not be reached at all."""
