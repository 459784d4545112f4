"""Module ratings exception hierarchy.

All rating-specific exceptions inherit from RatingsError,
enabling structured error handling and cleaner catch clauses.
"""


class RatingsError(Exception):
    """Base exception for all module ratings errors."""

    def __init__(self, message: str = "", *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class FetchError(RatingsError):
    """Error fetching or decoding a remote provider response."""

    def __init__(self, message: str = "", *, url: str = "", retryable: bool = True) -> None:
        super().__init__(message, retryable=retryable)
        self.url = url


class ConfigError(RatingsError):
    """Invalid or missing configuration."""
