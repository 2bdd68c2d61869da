from .exchange import (
    ErrorKind,
    BinanceApiError,
    MissingParameterError,
    ConfigurationError,
    ExchangeRestError,
    RateLimitErrorRest,
    ExchangeConnectionRestError,
    ResponseDecodeError,
)

__all__ = [
    'ErrorKind',
    'BinanceApiError',
    'MissingParameterError',
    'ConfigurationError',
    'ExchangeRestError',
    'RateLimitErrorRest',
    'ExchangeConnectionRestError',
    'ResponseDecodeError',
]
