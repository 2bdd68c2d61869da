from .structs import HTTPMethod, ParamLocation, RequestSpec, PreparedRequest, BinanceErrorResponse
from .signing import current_timestamp_ms, strip_absent, encode_params, sign_payload
from .request_builder import RequestBuilder
from .rest_client import BinanceRestClient

__all__ = [
    'HTTPMethod', 'ParamLocation', 'RequestSpec', 'PreparedRequest', 'BinanceErrorResponse',
    'current_timestamp_ms', 'strip_absent', 'encode_params', 'sign_payload',
    'RequestBuilder', 'BinanceRestClient',
]
