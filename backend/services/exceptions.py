class ProviderError(RuntimeError):
    """Raised when the generative text provider fails.

    ``status_code`` carries the HTTP status when the provider answered.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        """Rate limits and server-side errors are worth another attempt."""
        if self.status_code is None:
            return False
        return self.status_code == 429 or self.status_code >= 500


class ProviderTimeoutError(ProviderError):
    """Raised when the provider call times out or its connection drops."""

    @property
    def retryable(self) -> bool:
        return True
