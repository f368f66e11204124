"""Exception classes for telegraphkit."""


class TelegraphError(Exception):
    """Base exception for all telegraphkit errors."""
    pass


class InvalidRuleError(TelegraphError):
    """A tag replacement rule is malformed."""
    pass


class InvalidHtmlError(TelegraphError):
    """HTML could not be parsed at all."""
    pass


class InvalidContentError(TelegraphError):
    """A content tree (or its JSON form) is structurally invalid."""
    pass


class ConfigError(TelegraphError):
    """Configuration file is missing, unreadable or fails validation."""
    pass


class TokenNotProvidedError(TelegraphError):
    """An API method requiring an access token was called without one."""
    pass


class HttpTransportError(TelegraphError):
    """The HTTP request failed before a response was received."""
    pass


class TelegraphApiError(TelegraphError):
    """The Telegraph API answered with ``ok: false`` or an unusable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
