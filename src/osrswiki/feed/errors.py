# ABOUTME: Typed failures surfaced by the homepage feed pipeline
# ABOUTME: Single-section extraction problems never surface here; they degrade to empty sections


class FeedError(Exception):
    """Base exception for feed failures."""

    pass


class InvalidURLError(FeedError):
    """Raised when the configured wiki URL is not an absolute http(s) URL."""

    pass


class FetchFailedError(FeedError):
    """Raised when the homepage could not be fetched (transport failure or non-2xx status)."""

    pass


class FeedTimeoutError(FetchFailedError):
    """Raised when fetching the homepage exceeds its timeout."""

    pass


class DecodingFailedError(FeedError):
    """Raised when the homepage body is not valid UTF-8."""

    pass
