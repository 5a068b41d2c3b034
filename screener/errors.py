"""Domain errors raised by the store, ingestion and evaluation layers."""


class ScreenerError(Exception):
    """Base class for all screener errors."""


class ConfigurationError(ScreenerError):
    """Required configuration is missing or unusable."""


class DuplicateAccountError(ScreenerError):
    """An account with the same username is already registered."""


class IngestionError(ScreenerError):
    """The input stream could not be read at all."""


class RateLimitedError(ScreenerError):
    """Too many evaluation requests inside the limiter window."""

    def __init__(self, retry_after: int):
        super().__init__(f"Rate limit exceeded, retry after {retry_after}s")
        self.retry_after = retry_after


class ProviderError(ScreenerError):
    """The model provider failed or returned something unusable."""


class ProviderTransportError(ProviderError):
    """The call to the model provider itself failed."""


class MalformedResponseError(ProviderError):
    """No usable JSON object could be extracted from the model output."""


class ResponseValidationError(ProviderError):
    """The extracted JSON does not match the evaluation response shape."""
