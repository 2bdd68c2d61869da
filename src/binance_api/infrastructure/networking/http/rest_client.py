"""
Binance REST Client

Executes prepared requests over a shared aiohttp session and maps every
outcome to either decoded JSON or a typed BinanceApiError.

Key Features:
- Constructor injection for config, logger and session
- Lazy session creation with transport-level timeouts
- msgspec JSON decoding
- No retries: every failure is logged once and re-raised
"""

import asyncio
import time
from typing import Any, Dict, Mapping, Optional

import aiohttp
import msgspec
from yarl import URL

from binance_api.config.structs import ClientConfig
from binance_api.infrastructure.exceptions import (
    BinanceApiError, ConfigurationError, ExchangeConnectionRestError, ExchangeRestError,
    RateLimitErrorRest, ResponseDecodeError
)
from binance_api.infrastructure.logging import LoggerInterface, get_logger
from binance_api.infrastructure.networking.http.request_builder import RequestBuilder
from binance_api.infrastructure.networking.http.structs import (
    BinanceErrorResponse, HTTPMethod, PreparedRequest, RequestSpec
)

RATE_LIMIT_STATUSES = (429, 418)


class BinanceRestClient:
    """
    REST executor for the Binance API.

    Builds each request with RequestBuilder and sends it so the transmitted
    bytes equal the signed bytes.
    """

    def __init__(self, config: ClientConfig, logger: Optional[LoggerInterface] = None,
                 session: Optional[aiohttp.ClientSession] = None,
                 builder: Optional[RequestBuilder] = None):
        """
        Initialize REST client with constructor injection.

        Args:
            config: Client configuration
            logger: Logger instance (injected)
            session: Externally owned aiohttp session, never closed by the client
            builder: Request builder (defaults to one built from config)
        """
        self.config = config
        self.logger = logger or get_logger('binance_api.rest')
        self.builder = builder or RequestBuilder(config, self.logger)

        self._session = session
        self._owns_session = session is None
        self._semaphore = asyncio.Semaphore(config.network.max_concurrent)

        self.logger.debug("REST client initialized",
                          base_url=config.base_url,
                          api_key=config.credentials.get_preview(),
                          can_sign=config.credentials.can_sign)

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure aiohttp session is created."""
        if self._session is not None and not self._owns_session and self._session.closed:
            raise ConfigurationError("Injected aiohttp session is closed", "session")
        if self._session is None or self._session.closed:
            network = self.config.network
            timeout = aiohttp.ClientTimeout(
                total=network.request_timeout,
                connect=network.connect_timeout,
            )
            connector = aiohttp.TCPConnector(
                limit=network.max_concurrent,
                ttl_dns_cache=300,
                keepalive_timeout=30,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=timeout,
                headers={'Accept': 'application/json'},
            )
            self._owns_session = True
        return self._session

    def _parse_response(self, status: int, body: bytes) -> Any:
        """Decode a 2xx body. An empty, malformed or non-UTF-8 body is a decode failure."""
        try:
            return msgspec.json.decode(body)
        except (msgspec.DecodeError, UnicodeDecodeError) as e:
            raise ResponseDecodeError(status, body.decode("utf-8", errors="replace")) from e

    @staticmethod
    def _decode_error_payload(response_text: str) -> Optional[BinanceErrorResponse]:
        try:
            return msgspec.json.decode(response_text, type=BinanceErrorResponse)
        except (msgspec.DecodeError, msgspec.ValidationError):
            return None

    def _handle_error(self, status: int, response_text: str,
                      headers: Optional[Mapping[str, str]] = None) -> ExchangeRestError:
        """Map a non-2xx response to an exception."""
        api_code = None
        message = response_text
        error = self._decode_error_payload(response_text)
        if error is not None:
            api_code = error.code
            message = error.msg or response_text

        if status in RATE_LIMIT_STATUSES:
            retry_after = None
            value = (headers or {}).get('Retry-After')
            if value is not None and str(value).isdigit():
                retry_after = int(value)
            return RateLimitErrorRest(status, message, api_code, retry_after)

        return ExchangeRestError(status, message, api_code)

    async def send(self, request: PreparedRequest) -> Any:
        """Transmit a prepared request and decode the response."""
        session = await self._ensure_session()
        try:
            async with self._semaphore:
                async with session.request(
                    request.method.value,
                    URL(request.url, encoded=True),
                    data=request.body,
                    headers=request.headers
                ) as response:
                    body = await response.read()
                    status = response.status
                    headers = response.headers
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExchangeConnectionRestError(
                f"{request.method.value} {request.url} failed: {type(e).__name__}: {e}"
            ) from e

        if not 200 <= status < 300:
            raise self._handle_error(status, body.decode("utf-8", errors="replace"), headers)

        return self._parse_response(status, body)

    async def execute(self, method: HTTPMethod, path: str,
                      query: Optional[Dict[str, Any]] = None,
                      body: Optional[Dict[str, Any]] = None,
                      signed: bool = False) -> Any:
        """
        Build, sign and send a request.

        Args:
            method: HTTP method
            path: API path beginning with '/'
            query: Query string parameters
            body: Form body parameters
            signed: Whether timestamp, recvWindow and signature are required

        Returns:
            Decoded JSON (dict or list)

        Raises:
            BinanceApiError: Any failure, already logged
        """
        start_time = time.perf_counter()
        self.logger.debug("New request", method=method.value, path=path, signed=signed)

        try:
            request = self.builder.build(RequestSpec(
                method=method,
                path=path,
                query=dict(query or {}),
                body=dict(body or {}),
                signed=signed,
            ))
            result = await self.send(request)
        except BinanceApiError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self.logger.error("Request failed",
                              method=method.value,
                              path=path,
                              error_kind=e.kind.value,
                              error_type=type(e).__name__,
                              error_message=str(e),
                              duration_ms=round(duration_ms, 3))
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        self.logger.debug("Request completed", method=method.value, path=path,
                          duration_ms=round(duration_ms, 3))
        return result

    async def request(self, method: HTTPMethod, path: str,
                      params: Optional[Dict[str, Any]] = None,
                      data: Optional[Dict[str, Any]] = None,
                      signed: bool = False) -> Any:
        """Alias of execute with query/body named params/data."""
        return await self.execute(method, path, query=params, body=data, signed=signed)

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session is not None:
            if not self._session.closed:
                await self._session.close()
                self.logger.debug("REST client closed")
            self._session = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
