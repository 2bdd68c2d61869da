"""
Request Builder

Turns a RequestSpec into a PreparedRequest: strips absent values, places
parameters on the query string or in the form body, injects timestamp
and recvWindow on signed calls and appends the signature.

Placement:
- query only (or nothing): signed fields and signature go on the query
- body only: signed fields and signature go in the form body
- both: timestamp/recvWindow go on the query, the signature covers
  query_string + '&' + body_string and is appended to the body
"""

from typing import Callable, Dict, Any, Optional, Tuple

from binance_api.config.structs import ClientConfig
from binance_api.infrastructure.exceptions import ConfigurationError, MissingParameterError
from binance_api.infrastructure.logging import LoggerInterface, get_logger
from binance_api.infrastructure.networking.http.structs import RequestSpec, PreparedRequest
from binance_api.infrastructure.networking.http.signing import (
    current_timestamp_ms, encode_params, sign_payload, strip_absent
)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class RequestBuilder:
    """Builds signed or unsigned requests from a ClientConfig."""

    def __init__(self, config: ClientConfig, logger: Optional[LoggerInterface] = None,
                 clock: Callable[[], int] = current_timestamp_ms):
        self.config = config
        self.logger = logger or get_logger('binance_api.request_builder')
        self._clock = clock

    def build(self, spec: RequestSpec) -> PreparedRequest:
        if not spec.path:
            raise MissingParameterError('path')
        if spec.signed and not self.config.credentials.can_sign:
            raise ConfigurationError(
                f"Secret key is required for signed endpoint {spec.path}",
                "secret_key"
            )

        query = strip_absent(spec.query)
        body = strip_absent(spec.body)

        if query and body:
            query_string, body_string, signature = self._place_mixed(query, body, spec.signed)
        elif body:
            body_string, signature = self._serialize(body, spec.signed)
            query_string = ""
        else:
            query_string, signature = self._serialize(query, spec.signed)
            body_string = ""

        url = f"{self.config.base_url}{spec.path}"
        if query_string:
            url = f"{url}?{query_string}"

        headers = self._headers(has_body=bool(body_string))
        if signature is not None:
            self.logger.debug("Request signed", path=spec.path, placement="body" if body_string else "query")

        return PreparedRequest(
            method=spec.method,
            url=url,
            headers=headers,
            body=body_string or None,
            query_string=query_string,
            body_string=body_string,
            signature=signature,
        )

    def _inject_signed_fields(self, params: Dict[str, Any]) -> None:
        # A caller-supplied timestamp is replaced by a fresh one
        params.pop('timestamp', None)
        params['timestamp'] = self._clock()
        if 'recvWindow' not in params:
            params['recvWindow'] = self.config.recv_window

    def _serialize(self, params: Dict[str, Any], signed: bool) -> Tuple[str, Optional[str]]:
        if not signed:
            return encode_params(params), None

        self._inject_signed_fields(params)
        payload = encode_params(params)
        signature = sign_payload(self.config.credentials.secret_key, payload)
        return f"{payload}&signature={signature}", signature

    def _place_mixed(self, query: Dict[str, Any], body: Dict[str, Any],
                     signed: bool) -> Tuple[str, str, Optional[str]]:
        if not signed:
            return encode_params(query), encode_params(body), None

        self._inject_signed_fields(query)
        query_string = encode_params(query)
        body_string = encode_params(body)
        signature = sign_payload(self.config.credentials.secret_key, f"{query_string}&{body_string}")
        return query_string, f"{body_string}&signature={signature}", signature

    def _headers(self, has_body: bool) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if self.config.credentials.has_api_key:
            headers[self.config.api_key_header] = self.config.credentials.api_key
        if has_body:
            headers['Content-Type'] = FORM_CONTENT_TYPE
        return headers
