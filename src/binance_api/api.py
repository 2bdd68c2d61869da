"""
Binance API Facade

One coroutine per REST endpoint. Each method checks the endpoint's required
parameters, then hands the remaining keyword arguments untouched to the
REST client, which places, signs and sends them.

Parameters use the wire names of the API (``timeInForce``, ``listenKey``,
``recvWindow``...). Parameters set to None are dropped before sending.

Usage:
    async with BinanceApi(api_key="...", secret_key="...") as api:
        book = await api.depth(symbol="ETHBTC", limit=50)
        await api.order(symbol="ETHBTC", side="BUY", type="LIMIT",
                        timeInForce="GTC", quantity=1, price="0.1")
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiohttp
import msgspec

from binance_api.config.config_manager import config_from_env, load_config
from binance_api.config.structs import ApiCredentials, ClientConfig
from binance_api.endpoints import ENDPOINTS, Endpoint
from binance_api.infrastructure.exceptions import ConfigurationError, MissingParameterError
from binance_api.infrastructure.logging import LoggerFactory, LoggerInterface, get_logger
from binance_api.infrastructure.networking.http import BinanceRestClient, ParamLocation


class BinanceApi:
    """Async client for the Binance spot REST API."""

    def __init__(self, api_key: Optional[str] = None, secret_key: Optional[str] = None,
                 recv_window: Optional[int] = None, base_url: Optional[str] = None,
                 logger: Optional[Union[LoggerInterface, logging.Logger]] = None,
                 config: Optional[ClientConfig] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        """
        Args:
            api_key: API key, sent as a header on every request
            secret_key: Secret used to sign private endpoints
            recv_window: Default recvWindow (ms) for signed requests
            base_url: API root, defaults to https://api.binance.com
            logger: LoggerInterface or a standard logging.Logger
            config: Full client config; explicit arguments override its fields
            session: Externally owned aiohttp session
        """
        config = config or ClientConfig()
        overrides: Dict[str, Any] = {}
        if api_key is not None or secret_key is not None:
            overrides['credentials'] = ApiCredentials(
                api_key=api_key if api_key is not None else config.credentials.api_key,
                secret_key=secret_key if secret_key is not None else config.credentials.secret_key,
            )
        if recv_window is not None:
            overrides['recv_window'] = recv_window
        if base_url is not None:
            overrides['base_url'] = base_url.rstrip('/')
        if overrides:
            config = msgspec.structs.replace(config, **overrides)
        try:
            config.validate()
        except ValueError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}", "client") from e

        if isinstance(logger, logging.Logger):
            logger = LoggerFactory.from_python_logger(logger)
        self.config = config
        self.logger = logger or get_logger('binance_api')
        self._rest = BinanceRestClient(config, self.logger, session=session)

    @classmethod
    def from_config(cls, path: Optional[Union[str, Path]] = None,
                    session: Optional[aiohttp.ClientSession] = None) -> 'BinanceApi':
        """Create a client from a YAML config file (see config_manager)."""
        client_config, logging_config = load_config(path)
        LoggerFactory.configure(logging_config)
        return cls(config=client_config, session=session)

    @classmethod
    def from_env(cls, session: Optional[aiohttp.ClientSession] = None) -> 'BinanceApi':
        """Create a client from BINANCE_* environment variables."""
        return cls(config=config_from_env(), session=session)

    async def _call(self, name: str, params: Dict[str, Any]) -> Any:
        endpoint: Endpoint = ENDPOINTS[name]
        for param in endpoint.required:
            if params.get(param) is None:
                self.logger.error(f'Parameter "{param}" required', endpoint=name)
                raise MissingParameterError(param)

        if endpoint.location is ParamLocation.BODY:
            return await self._rest.execute(endpoint.method, endpoint.path,
                                            body=params, signed=endpoint.signed)
        return await self._rest.execute(endpoint.method, endpoint.path,
                                        query=params, signed=endpoint.signed)

    # Public market data

    async def ping(self) -> bool:
        """Test connectivity. True when the server answers with an empty object."""
        result = await self._call('ping', {})
        return isinstance(result, dict) and not result

    async def server_time(self) -> int:
        """Server time in epoch milliseconds, 0 if the server omits it."""
        result = await self._call('server_time', {})
        if isinstance(result, dict):
            return int(result.get('serverTime') or 0)
        return 0

    async def exchange_info(self) -> Dict[str, Any]:
        """Exchange trading rules and symbol information."""
        return await self._call('exchange_info', {})

    async def all_prices(self) -> List[Dict[str, Any]]:
        """Latest price for all symbols."""
        return await self._call('all_prices', {})

    async def depth(self, **params) -> Dict[str, Any]:
        """
        Order book.

        Args:
            symbol: Required
            limit: Default 100, max 1000
        """
        return await self._call('depth', params)

    async def trades(self, **params) -> List[Dict[str, Any]]:
        """Recent trades. Requires symbol; optional limit."""
        return await self._call('trades', params)

    async def historical_trades(self, **params) -> List[Dict[str, Any]]:
        """Older trades. Requires symbol; optional limit, fromId."""
        return await self._call('historical_trades', params)

    async def aggregate_trades(self, **params) -> List[Dict[str, Any]]:
        """
        Compressed/aggregate trades. Trades that fill at the same time, from
        the same order, with the same price have their quantity aggregated.

        Args:
            symbol: Required
            fromId: ID to get aggregate trades from INCLUSIVE
            startTime: Timestamp in ms to get aggregate trades from INCLUSIVE
            endTime: Timestamp in ms to get aggregate trades until INCLUSIVE
            limit: Default 500, max 500
        """
        return await self._call('aggregate_trades', params)

    async def klines(self, **params) -> List[List[Any]]:
        """
        Kline/candlestick bars for a symbol.

        Args:
            symbol: Required
            interval: Required, e.g. 1m, 1h, 1d
            startTime, endTime, limit: Optional
        """
        return await self._call('klines', params)

    async def ticker(self, **params) -> Dict[str, Any]:
        """24 hour price change statistics. Requires symbol."""
        return await self._call('ticker', params)

    async def ticker_price(self, **params) -> Any:
        """Latest price for a symbol, or for all symbols when symbol is omitted."""
        return await self._call('ticker_price', params)

    async def all_book_tickers(self) -> List[Dict[str, Any]]:
        """Best price/qty on the order book for all symbols."""
        return await self._call('all_book_tickers', {})

    async def book_ticker(self, **params) -> Any:
        return await self._call('book_ticker', params)

    # Trading

    async def order(self, **params) -> Dict[str, Any]:
        """
        Send in a new order. Signed; parameters travel in the form body.

        Args:
            symbol, side, type, timeInForce, quantity, price: Required
            newClientOrderId: A unique id for the order
            stopPrice: Used with stop orders
            icebergQty: Used with iceberg orders
            recvWindow: Overrides the client default
        """
        return await self._call('order', params)

    async def order_test(self, **params) -> Dict[str, Any]:
        """Validate a new order without sending it to the matching engine."""
        return await self._call('order_test', params)

    async def cancel_order(self, **params) -> Dict[str, Any]:
        """
        Cancel an active order. Requires symbol and either orderId or
        origClientOrderId.
        """
        return await self._call('cancel_order', params)

    async def open_orders(self, **params) -> List[Dict[str, Any]]:
        """All open orders, for one symbol when symbol is given."""
        return await self._call('open_orders', params)

    async def all_orders(self, **params) -> List[Dict[str, Any]]:
        """All account orders: active, canceled, or filled. Requires symbol."""
        return await self._call('all_orders', params)

    # Account

    async def account(self, **params) -> Dict[str, Any]:
        """Current account information."""
        return await self._call('account', params)

    async def my_trades(self, **params) -> List[Dict[str, Any]]:
        """Trades for a specific account and symbol."""
        return await self._call('my_trades', params)

    # User data stream

    async def start_user_data_stream(self) -> Dict[str, Any]:
        """Start a new user data stream; the response carries listenKey."""
        return await self._call('start_user_data_stream', {})

    async def keep_alive_user_data_stream(self, **params) -> Dict[str, Any]:
        """Keepalive a user data stream. Requires listenKey."""
        return await self._call('keep_alive_user_data_stream', params)

    async def delete_user_data_stream(self, **params) -> Dict[str, Any]:
        """Close out a user data stream. Requires listenKey."""
        return await self._call('delete_user_data_stream', params)

    async def close(self) -> None:
        await self._rest.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
