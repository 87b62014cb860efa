"""Custom exception hierarchy for the prerender proxy."""


class PrerenderError(Exception):
    """Base exception for all prerender proxy errors."""


class ConfigurationError(PrerenderError):
    """Raised when configuration is missing or invalid."""


class BackendError(PrerenderError):
    """Raised when the rendering backend cannot deliver a page.

    Attributes:
        message: Error message
        status_code: HTTP status code from the backend (optional)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class BackendTimeoutError(BackendError):
    """Raised when a backend request times out."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=None)


class BackendConnectionError(BackendError):
    """Raised when unable to connect to the backend."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=None)
