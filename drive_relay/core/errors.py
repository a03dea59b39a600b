"""Error taxonomy for the upload relay."""


class RelayError(Exception):
    """Base exception for every failure the relay reports to callers."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ClientInputError(RelayError):
    """Raised when the request is missing something only the caller can fix."""
    pass


class PayloadTooLarge(RelayError):
    """Raised when the uploaded file exceeds the configured limit."""

    def __init__(self, limit_bytes: int) -> None:
        self.limit_bytes = limit_bytes
        limit_mb = limit_bytes // (1024 * 1024)
        super().__init__(f"File too large (max {limit_mb}MB)")


class ConfigurationError(RelayError):
    """Raised when credentials or the destination folder are not configured."""
    pass


class RemoteServiceError(RelayError):
    """Raised when the Drive API call fails (auth, quota, network)."""

    DEFAULT_MESSAGE = "Upload failed"

    def __init__(self, message: str = "", status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message or self.DEFAULT_MESSAGE)
