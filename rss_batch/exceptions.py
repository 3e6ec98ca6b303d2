class RSSFetchError(Exception):
    """Raised when an RSS/Atom feed cannot be fetched."""


class FeedTimeoutError(RSSFetchError):
    """Raised when a feed request exceeds its deadline."""


class ParseError(Exception):
    """Raised when a retrieved document is not a well-formed RSS/Atom feed."""


class MissingFeedUrlError(Exception):
    """Raised when a source has no feed URL configured."""


class InvalidBatchRequest(ValueError):
    """Raised when a batch request is structurally malformed."""
