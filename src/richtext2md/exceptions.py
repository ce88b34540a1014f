"""Custom exceptions for richtext2md."""


class RichText2mdError(Exception):
    """Base exception for richtext2md operations."""


class ConfigurationError(RichText2mdError):
    """Required configuration is missing or invalid."""


class FetchError(RichText2mdError):
    """Error during content fetching."""


class SourceNotAvailableError(FetchError):
    """Source content (space, entries or file) is not available."""


class RateLimitError(FetchError):
    """Rate limited by the remote content store."""


class ParseError(RichText2mdError):
    """Error during input parsing."""


class ImportFailedError(RichText2mdError):
    """Destination content store rejected an entry."""
