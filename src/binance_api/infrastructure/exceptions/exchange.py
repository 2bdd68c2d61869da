from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Discriminator carried by every client error."""
    MISSING_PARAMETER = "missing_parameter"
    TRANSPORT_FAILURE = "transport_failure"
    UNSUCCESSFUL_RESPONSE = "unsuccessful_response"
    DECODE_FAILURE = "decode_failure"
    CONFIGURATION = "configuration"


class BinanceApiError(Exception):
    """Base exception for all Binance client errors."""
    kind: ErrorKind = ErrorKind.UNSUCCESSFUL_RESPONSE

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MissingParameterError(BinanceApiError):
    """A required parameter was absent. Raised before any network call."""
    kind = ErrorKind.MISSING_PARAMETER

    def __init__(self, parameter: str) -> None:
        self.parameter = parameter
        super().__init__(f'Parameter "{parameter}" required')


class ConfigurationError(BinanceApiError):
    """Configuration-specific exception for setup errors."""
    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str, setting_name: Optional[str] = None):
        self.setting_name = setting_name
        super().__init__(message)


class ExchangeRestError(BinanceApiError):
    """HTTP status outside 2xx."""
    kind = ErrorKind.UNSUCCESSFUL_RESPONSE

    def __init__(self, code: int, message: str, api_code: int | None = None) -> None:
        self.api_code = api_code
        self.status_code = code
        super().__init__(message)

    def __str__(self):
        if self.api_code is not None:
            return f"HTTP {self.status_code} ({self.api_code}): {self.message}"
        return f"HTTP {self.status_code}: {self.message}"


class RateLimitErrorRest(ExchangeRestError):
    """Rate limit exceeded (429) or IP banned (418)."""
    def __init__(self, code: int, message: str, api_code: int | None = None, retry_after: int | None = None) -> None:
        super().__init__(code, message, api_code)
        self.retry_after = retry_after

    def __str__(self):
        return f"RateLimitError: {self.status_code} - {self.message} - {self.api_code} - {self.retry_after}"


class ExchangeConnectionRestError(BinanceApiError):
    """The HTTP call did not complete."""
    kind = ErrorKind.TRANSPORT_FAILURE


class ResponseDecodeError(BinanceApiError):
    """Server answered 2xx but the body was not valid JSON."""
    kind = ErrorKind.DECODE_FAILURE

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Invalid JSON response: {body[:100]}...")
