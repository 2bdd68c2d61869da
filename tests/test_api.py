"""
End-to-end tests for the BinanceApi facade against a fake aiohttp session.
"""

import logging
import time
from urllib.parse import parse_qsl

import pytest

from binance_api import BinanceApi, ENDPOINTS
from binance_api.config.structs import ApiCredentials, ClientConfig
from binance_api.infrastructure.exceptions import (
    ConfigurationError, ErrorKind, MissingParameterError
)
from binance_api.infrastructure.logging import Logger
from binance_api.infrastructure.networking.http import HTTPMethod, ParamLocation, sign_payload

from conftest import API_KEY, SECRET_KEY, FakeResponse, FakeSession


@pytest.fixture
def api(fake_session, mock_logger):
    return BinanceApi(api_key=API_KEY, secret_key=SECRET_KEY, session=fake_session, logger=mock_logger)


class TestConstruction:

    def test_defaults(self, fake_session):
        api = BinanceApi(session=fake_session)
        assert api.config.base_url == 'https://api.binance.com'
        assert api.config.recv_window == 5000
        assert api.config.credentials == ApiCredentials()

    def test_explicit_arguments_override_config(self, fake_session):
        config = ClientConfig(credentials=ApiCredentials(api_key='a', secret_key='b'), recv_window=100)
        api = BinanceApi(secret_key='c', recv_window=2000, base_url='https://testnet.binance.vision/',
                         config=config, session=fake_session)
        assert api.config.credentials == ApiCredentials(api_key='a', secret_key='c')
        assert api.config.recv_window == 2000
        assert api.config.base_url == 'https://testnet.binance.vision'

    def test_python_logger_is_wrapped(self, fake_session):
        api = BinanceApi(logger=logging.getLogger('my.app'), session=fake_session)
        assert isinstance(api.logger, Logger)
        assert api.logger.name == 'my.app'

    def test_invalid_recv_window(self, fake_session):
        with pytest.raises(ConfigurationError):
            BinanceApi(recv_window=-1, session=fake_session)

    def test_from_env(self, monkeypatch, fake_session):
        monkeypatch.setenv('BINANCE_API_KEY', 'env-key')
        monkeypatch.setenv('BINANCE_SECRET_KEY', 'env-secret')
        monkeypatch.setenv('BINANCE_RECV_WINDOW', '7000')
        monkeypatch.delenv('BINANCE_BASE_URL', raising=False)

        api = BinanceApi.from_env(session=fake_session)

        assert api.config.credentials.api_key == 'env-key'
        assert api.config.credentials.secret_key == 'env-secret'
        assert api.config.recv_window == 7000


class TestPublicEndpoints:

    @pytest.mark.asyncio
    async def test_depth(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '{"lastUpdateId": 1027024, "bids": [], "asks": []}'))

        result = await api.depth(symbol='ETHBTC', limit=50)

        assert result['lastUpdateId'] == 1027024
        call = fake_session.last_call
        assert call['method'] == 'GET'
        assert call['url'] == 'https://api.binance.com/api/v1/depth?symbol=ETHBTC&limit=50'
        assert call['headers'] == {'X-MBX-APIKEY': API_KEY}

    @pytest.mark.asyncio
    async def test_depth_missing_symbol(self, api, fake_session, mock_logger):
        with pytest.raises(MissingParameterError) as exc_info:
            await api.depth(limit=50)

        assert exc_info.value.parameter == 'symbol'
        assert exc_info.value.kind is ErrorKind.MISSING_PARAMETER
        assert str(exc_info.value) == 'Parameter "symbol" required'
        assert fake_session.calls == []
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_required_none_counts_as_missing(self, api, fake_session):
        with pytest.raises(MissingParameterError):
            await api.klines(symbol='ETHBTC', interval=None)
        assert fake_session.calls == []

    @pytest.mark.asyncio
    async def test_optional_none_dropped(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '[]'))
        await api.trades(symbol='ETHBTC', limit=None)
        assert fake_session.last_call['url'].endswith('/api/v1/trades?symbol=ETHBTC')

    @pytest.mark.asyncio
    async def test_unknown_params_pass_through(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '[]'))
        await api.klines(symbol='ETHBTC', interval='1h', timeZone='8')
        assert fake_session.last_call['url'].endswith('?symbol=ETHBTC&interval=1h&timeZone=8')

    @pytest.mark.asyncio
    async def test_ping_empty_object(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '{}'))
        assert await api.ping() is True

    @pytest.mark.asyncio
    async def test_ping_non_empty(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '{"unexpected": 1}'))
        assert await api.ping() is False

    @pytest.mark.asyncio
    async def test_server_time(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '{"serverTime": 1499827319559}'))
        assert await api.server_time() == 1499827319559
        assert fake_session.last_call['url'] == 'https://api.binance.com/api/v1/time'

    @pytest.mark.asyncio
    async def test_server_time_missing_field(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '{}'))
        assert await api.server_time() == 0

    @pytest.mark.asyncio
    async def test_public_calls_work_without_credentials(self, fake_session):
        api = BinanceApi(session=fake_session)
        fake_session.queue(FakeResponse(200, '[]'))
        await api.all_prices()
        assert fake_session.last_call['headers'] == {}


class TestSignedEndpoints:

    @pytest.mark.asyncio
    async def test_order(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '{"orderId": 28}'))

        before = int(time.time() * 1000)
        result = await api.order(symbol='ETHBTC', side='BUY', type='LIMIT',
                                 timeInForce='GTC', quantity=1, price=0.1)
        after = int(time.time() * 1000)

        assert result == {'orderId': 28}
        call = fake_session.last_call
        assert call['method'] == 'POST'
        assert call['url'] == 'https://api.binance.com/api/v3/order'

        payload, _, signature = call['data'].rpartition('&signature=')
        params = dict(parse_qsl(payload))
        assert params == {
            'symbol': 'ETHBTC', 'side': 'BUY', 'type': 'LIMIT', 'timeInForce': 'GTC',
            'quantity': '1', 'price': '0.1',
            'timestamp': params['timestamp'], 'recvWindow': '5000',
        }
        assert before <= int(params['timestamp']) <= after
        assert signature == sign_payload(SECRET_KEY, payload)

    @pytest.mark.asyncio
    async def test_order_missing_field(self, api, fake_session):
        with pytest.raises(MissingParameterError) as exc_info:
            await api.order(symbol='ETHBTC', side='BUY', type='LIMIT', quantity=1, price=0.1)
        assert exc_info.value.parameter == 'timeInForce'
        assert fake_session.calls == []

    @pytest.mark.asyncio
    async def test_order_without_secret(self, fake_session):
        api = BinanceApi(api_key=API_KEY, session=fake_session)
        with pytest.raises(ConfigurationError):
            await api.order(symbol='ETHBTC', side='BUY', type='LIMIT',
                            timeInForce='GTC', quantity=1, price=0.1)
        assert fake_session.calls == []

    @pytest.mark.asyncio
    async def test_cancel_order_uses_delete_with_body(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '{"orderId": 28}'))
        await api.cancel_order(symbol='ETHBTC', orderId=28)
        call = fake_session.last_call
        assert call['method'] == 'DELETE'
        assert call['data'].startswith('symbol=ETHBTC&orderId=28&timestamp=')

    @pytest.mark.asyncio
    async def test_account_recv_window_override(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '{"balances": []}'))
        await api.account(recvWindow=10000)
        query = fake_session.last_call['url'].split('?', 1)[1]
        keys = [k for k, _ in parse_qsl(query)]
        assert keys == ['recvWindow', 'timestamp', 'signature']
        assert dict(parse_qsl(query))['recvWindow'] == '10000'

    @pytest.mark.asyncio
    async def test_open_orders_signed_query(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '[]'))
        await api.open_orders()
        call = fake_session.last_call
        assert call['method'] == 'GET'
        assert '/api/v3/openOrders?timestamp=' in call['url']
        assert call['data'] is None


class TestUserDataStream:

    @pytest.mark.asyncio
    async def test_start(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '{"listenKey": "abc"}'))
        result = await api.start_user_data_stream()
        call = fake_session.last_call
        assert result == {'listenKey': 'abc'}
        assert call['method'] == 'POST'
        assert call['url'] == 'https://api.binance.com/api/v1/userDataStream'
        assert call['headers'] == {'X-MBX-APIKEY': API_KEY}

    @pytest.mark.asyncio
    async def test_keep_alive_requires_listen_key(self, api, fake_session):
        with pytest.raises(MissingParameterError) as exc_info:
            await api.keep_alive_user_data_stream()
        assert exc_info.value.parameter == 'listenKey'

    @pytest.mark.asyncio
    async def test_delete(self, api, fake_session):
        fake_session.queue(FakeResponse(200, '{}'))
        await api.delete_user_data_stream(listenKey='abc')
        call = fake_session.last_call
        assert call['method'] == 'DELETE'
        assert call['url'] == 'https://api.binance.com/api/v1/userDataStream?listenKey=abc'
        assert 'signature' not in call['url']


class TestEndpointCatalog:

    def test_every_endpoint_has_a_facade_method(self):
        for name in ENDPOINTS:
            assert callable(getattr(BinanceApi, name)), name

    def test_signed_endpoints(self):
        signed = {name for name, e in ENDPOINTS.items() if e.signed}
        assert signed == {'order', 'order_test', 'cancel_order', 'open_orders',
                          'all_orders', 'account', 'my_trades'}

    def test_body_placement_only_for_order_writes(self):
        body = {name for name, e in ENDPOINTS.items() if e.location is ParamLocation.BODY}
        assert body == {'order', 'order_test', 'cancel_order'}

    def test_user_data_stream_verbs(self):
        assert ENDPOINTS['start_user_data_stream'].method is HTTPMethod.POST
        assert ENDPOINTS['keep_alive_user_data_stream'].method is HTTPMethod.PUT
        assert ENDPOINTS['delete_user_data_stream'].method is HTTPMethod.DELETE


@pytest.mark.asyncio
async def test_context_manager_keeps_injected_session_open():
    session = FakeSession(FakeResponse(200, '{}'))
    async with BinanceApi(session=session) as api:
        assert await api.ping() is True
    assert session.closed is False


def test_from_config(tmp_path, monkeypatch, fake_session):
    from binance_api.config import config_manager
    monkeypatch.setattr(config_manager, 'guess_file_paths', lambda name: [tmp_path / name])
    path = tmp_path / 'config.yaml'
    path.write_text(
        "binance:\n"
        "  api_key: file-key\n"
        "  secret_key: file-secret\n"
        "  recv_window: 3000\n"
    )

    api = BinanceApi.from_config(path, session=fake_session)

    assert api.config.credentials == ApiCredentials(api_key='file-key', secret_key='file-secret')
    assert api.config.recv_window == 3000
