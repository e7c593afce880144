# ABOUTME: Typed failures surfaced by the search pipeline
# ABOUTME: Separates transient network conditions from upstream contract breaks

import httpx


class SearchError(Exception):
    """Base exception for search failures."""

    pass


class NetworkUnavailableError(SearchError):
    """Raised when the wiki cannot be reached (DNS, connection refused, connection dropped)."""

    pass


class SearchTimeoutError(SearchError):
    """Raised when a request or the whole search operation exceeds its timeout."""

    pass


class RateLimitedError(SearchError):
    """Raised when the wiki answers 429 Too Many Requests."""

    def __init__(self, message: str, retry_after: str | None = None):
        super().__init__(message)
        self.retry_after = retry_after


class ServerError(SearchError):
    """Raised when the wiki answers with a 5xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(SearchError):
    """Raised when the response body does not match the expected API schema."""

    pass


def convert_transport_error(e: httpx.TransportError) -> SearchError:
    """Convert an httpx transport failure into the matching search error."""
    if isinstance(e, httpx.TimeoutException):
        return SearchTimeoutError(f"Request timed out: {e}")
    return NetworkUnavailableError(f"Network unavailable: {e}")


def raise_for_upstream_status(response: httpx.Response) -> None:
    """Raise the typed search error matching a non-2xx upstream status."""
    status = response.status_code
    if response.is_success:
        return

    if status == 429:
        raise RateLimitedError("Rate limited by wiki API", retry_after=response.headers.get("Retry-After"))
    if status >= 500:
        raise ServerError(f"Wiki API server error: HTTP {status}", status_code=status)

    # Anything else (4xx, unexpected redirects) means our request no longer matches the API contract
    raise MalformedResponseError(f"Unexpected HTTP {status} from wiki API")
