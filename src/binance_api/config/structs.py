from typing import Optional
from msgspec import Struct, field

DEFAULT_BASE_URL = "https://api.binance.com"
DEFAULT_RECV_WINDOW = 5000
DEFAULT_API_KEY_HEADER = "X-MBX-APIKEY"


class ApiCredentials(Struct, frozen=True):
    """API credentials. Either field may be absent for public-only use."""
    api_key: Optional[str] = None
    secret_key: Optional[str] = None

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @property
    def can_sign(self) -> bool:
        """Check if a secret is available for signed endpoints."""
        return bool(self.secret_key)

    def get_preview(self) -> str:
        """Get safe preview of credentials for logging."""
        if not self.api_key:
            return "Not configured"
        if len(self.api_key) > 8:
            return f"{self.api_key[:4]}...{self.api_key[-4:]}"
        return "***"


class NetworkConfig(Struct, frozen=True):
    """
    Network configuration settings.

    Attributes:
        request_timeout: Total HTTP request timeout in seconds
        connect_timeout: Connection timeout in seconds
        max_concurrent: Maximum concurrent requests per client
    """
    request_timeout: float = 10.0
    connect_timeout: float = 5.0
    max_concurrent: int = 10

    def validate(self) -> None:
        """Validate network configuration."""
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive")
        if self.max_concurrent <= 0:
            raise ValueError("max_concurrent must be positive")


class ClientConfig(Struct, frozen=True):
    """
    Complete client configuration, passed explicitly to the request
    builder and the REST client.

    Attributes:
        base_url: Scheme and host of the API
        credentials: API key and secret
        recv_window: Default validity window (ms) for signed requests
        network: Transport settings
        api_key_header: Header carrying the API key
    """
    base_url: str = DEFAULT_BASE_URL
    credentials: ApiCredentials = field(default_factory=ApiCredentials)
    recv_window: int = DEFAULT_RECV_WINDOW
    network: NetworkConfig = field(default_factory=NetworkConfig)
    api_key_header: str = DEFAULT_API_KEY_HEADER

    def validate(self) -> None:
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got: {self.base_url}")
        if self.recv_window <= 0:
            raise ValueError("recv_window must be positive")
        self.network.validate()
