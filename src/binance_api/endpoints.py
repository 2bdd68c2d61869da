"""
Static endpoint catalog.

Each Endpoint fixes the verb, path, required parameter names, whether the
call is signed and where caller parameters are placed. Optional names are
documentation only: unknown parameters pass through unchanged.
"""

from typing import Dict, Tuple

import msgspec

from binance_api.infrastructure.networking.http.structs import HTTPMethod, ParamLocation


class Endpoint(msgspec.Struct, frozen=True):
    name: str
    method: HTTPMethod
    path: str
    required: Tuple[str, ...] = ()
    optional: Tuple[str, ...] = ()
    signed: bool = False
    location: ParamLocation = ParamLocation.QUERY


_ORDER_REQUIRED = ('symbol', 'side', 'type', 'timeInForce', 'quantity', 'price')
_ORDER_OPTIONAL = ('newClientOrderId', 'stopPrice', 'icebergQty', 'recvWindow')

ENDPOINTS: Dict[str, Endpoint] = {e.name: e for e in (
    # Public market data
    Endpoint('ping', HTTPMethod.GET, '/api/v1/ping'),
    Endpoint('server_time', HTTPMethod.GET, '/api/v1/time'),
    Endpoint('exchange_info', HTTPMethod.GET, '/api/v1/exchangeInfo'),
    Endpoint('all_prices', HTTPMethod.GET, '/api/v1/ticker/allPrices'),
    Endpoint('depth', HTTPMethod.GET, '/api/v1/depth',
             required=('symbol',), optional=('limit',)),
    Endpoint('trades', HTTPMethod.GET, '/api/v1/trades',
             required=('symbol',), optional=('limit',)),
    Endpoint('historical_trades', HTTPMethod.GET, '/api/v1/historicalTrades',
             required=('symbol',), optional=('limit', 'fromId')),
    Endpoint('aggregate_trades', HTTPMethod.GET, '/api/v1/aggTrades',
             required=('symbol',), optional=('fromId', 'startTime', 'endTime', 'limit')),
    Endpoint('klines', HTTPMethod.GET, '/api/v1/klines',
             required=('symbol', 'interval'), optional=('startTime', 'endTime', 'limit')),
    Endpoint('ticker', HTTPMethod.GET, '/api/v1/ticker/24hr',
             required=('symbol',)),
    Endpoint('ticker_price', HTTPMethod.GET, '/api/v3/ticker/price',
             optional=('symbol',)),
    Endpoint('all_book_tickers', HTTPMethod.GET, '/api/v1/ticker/allBookTickers'),
    Endpoint('book_ticker', HTTPMethod.GET, '/api/v3/ticker/bookTicker',
             optional=('symbol',)),

    # Trading
    Endpoint('order', HTTPMethod.POST, '/api/v3/order',
             required=_ORDER_REQUIRED, optional=_ORDER_OPTIONAL,
             signed=True, location=ParamLocation.BODY),
    Endpoint('order_test', HTTPMethod.POST, '/api/v3/order/test',
             required=_ORDER_REQUIRED, optional=_ORDER_OPTIONAL,
             signed=True, location=ParamLocation.BODY),
    Endpoint('cancel_order', HTTPMethod.DELETE, '/api/v3/order',
             required=('symbol',),
             optional=('orderId', 'origClientOrderId', 'newClientOrderId', 'recvWindow'),
             signed=True, location=ParamLocation.BODY),
    Endpoint('open_orders', HTTPMethod.GET, '/api/v3/openOrders',
             optional=('symbol', 'recvWindow'), signed=True),
    Endpoint('all_orders', HTTPMethod.GET, '/api/v3/allOrders',
             required=('symbol',), optional=('orderId', 'limit', 'recvWindow'), signed=True),

    # Account
    Endpoint('account', HTTPMethod.GET, '/api/v3/account',
             optional=('recvWindow',), signed=True),
    Endpoint('my_trades', HTTPMethod.GET, '/api/v3/myTrades',
             required=('symbol',), optional=('limit', 'fromId', 'recvWindow'), signed=True),

    # User data stream (API key header only)
    Endpoint('start_user_data_stream', HTTPMethod.POST, '/api/v1/userDataStream'),
    Endpoint('keep_alive_user_data_stream', HTTPMethod.PUT, '/api/v1/userDataStream',
             required=('listenKey',)),
    Endpoint('delete_user_data_stream', HTTPMethod.DELETE, '/api/v1/userDataStream',
             required=('listenKey',)),
)}
