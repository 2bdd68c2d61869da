from enum import Enum
from typing import Any, Dict, Optional
import msgspec


class HTTPMethod(Enum):
    """HTTP methods used by the API."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ParamLocation(Enum):
    """Where an endpoint expects its caller parameters."""
    QUERY = "query"
    BODY = "body"


class RequestSpec(msgspec.Struct, frozen=True):
    """Intent of a single call, built fresh per request."""
    method: HTTPMethod
    path: str
    query: Dict[str, Any] = {}
    body: Dict[str, Any] = {}
    signed: bool = False


class PreparedRequest(msgspec.Struct, frozen=True):
    """
    Fully serialized request, ready for transmission.

    Attributes:
        method: HTTP method
        url: Absolute URL with the encoded query string appended
        headers: Request headers (API key, content type)
        body: Form-encoded content, None when there is no body
        query_string: Serialized query (including signature when signed on query)
        body_string: Serialized body (including signature when signed on body)
        signature: Hex HMAC-SHA256 signature, None for unsigned calls
    """
    method: HTTPMethod
    url: str
    headers: Dict[str, str] = {}
    body: Optional[str] = None
    query_string: str = ""
    body_string: str = ""
    signature: Optional[str] = None


class BinanceErrorResponse(msgspec.Struct):
    """Error payload returned by the API on non-2xx responses."""
    code: int = 0
    msg: str = ""
