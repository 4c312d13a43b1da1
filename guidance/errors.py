"""Errors raised between the chat session, the HTTP client and the model."""


FALLBACK_MESSAGE = (
    "I apologize, but I'm currently unable to connect to the career guidance service. "
    "This might be due to network issues or service maintenance. "
    "Please try again in a few moments."
)


class GuidanceError(Exception):
    """Base for all career guidance errors."""
    pass


class ConfigurationError(GuidanceError):
    """A required setting (usually the API key) is missing."""
    pass


class TransportError(GuidanceError):
    """The chat service could not be reached or answered with a bad status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class UpstreamError(GuidanceError):
    """The generation model (or the service in front of it) reported an error."""
    pass


class RequestInFlightError(GuidanceError):
    """A session already has an outstanding request."""
    pass
