"""
Async client binding for the Binance spot REST API.

Usage:
    from binance_api import BinanceApi

    async with BinanceApi(api_key="...", secret_key="...") as api:
        await api.ping()
"""

from binance_api.api import BinanceApi
from binance_api.config import ApiCredentials, ClientConfig, NetworkConfig, load_config, config_from_env
from binance_api.endpoints import ENDPOINTS, Endpoint
from binance_api.infrastructure.exceptions import (
    ErrorKind,
    BinanceApiError,
    MissingParameterError,
    ConfigurationError,
    ExchangeRestError,
    RateLimitErrorRest,
    ExchangeConnectionRestError,
    ResponseDecodeError,
)
from binance_api.infrastructure.networking.http import (
    HTTPMethod, RequestSpec, PreparedRequest, RequestBuilder, BinanceRestClient
)

__version__ = "0.1.0"

__all__ = [
    'BinanceApi',
    'ApiCredentials', 'ClientConfig', 'NetworkConfig', 'load_config', 'config_from_env',
    'ENDPOINTS', 'Endpoint',
    'ErrorKind', 'BinanceApiError', 'MissingParameterError', 'ConfigurationError',
    'ExchangeRestError', 'RateLimitErrorRest', 'ExchangeConnectionRestError', 'ResponseDecodeError',
    'HTTPMethod', 'RequestSpec', 'PreparedRequest', 'RequestBuilder', 'BinanceRestClient',
]
