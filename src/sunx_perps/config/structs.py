from typing import Optional, Dict, Any

from msgspec import Struct, field

from sunx_perps.exchanges.structs.enums import ApiVersion


DEFAULT_BASE_URL = "https://api.sunx.io"


class NetworkConfig(Struct, frozen=True):
    """
    Network configuration settings.

    Attributes:
        request_timeout: Total HTTP request timeout in seconds
        connect_timeout: Connection timeout in seconds
    """
    request_timeout: float = 10.0
    connect_timeout: float = 5.0

    def validate(self) -> None:
        """Validate network configuration."""
        if self.request_timeout <= 0 or self.request_timeout > 60:
            raise ValueError(f"request_timeout must be between 0 and 60 seconds, got {self.request_timeout}")
        if self.connect_timeout <= 0:
            raise ValueError("connect_timeout must be positive")
        if self.connect_timeout > self.request_timeout:
            raise ValueError("connect_timeout cannot exceed request_timeout")


class SunxCredentials(Struct, frozen=True):
    """SunX API credentials. The secret is never rendered by repr or logs."""
    access_key_id: str
    secret_key: str
    base_url: str = DEFAULT_BASE_URL

    @property
    def has_private_api(self) -> bool:
        """Check if both credentials are provided."""
        return bool(self.access_key_id) and bool(self.secret_key)

    def get_preview(self) -> str:
        """Get safe preview of credentials for logging."""
        if not self.access_key_id:
            return "Not configured"
        if len(self.access_key_id) > 8:
            return f"{self.access_key_id[:4]}...{self.access_key_id[-4:]}"
        return "***"

    def validate(self) -> None:
        """Validate credentials (empty pair allowed for public-only mode)."""
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an absolute http(s) URL, got {self.base_url!r}")
        if bool(self.access_key_id) != bool(self.secret_key):
            raise ValueError("Both access_key_id and secret_key must be provided together or both empty")
        if ' ' in self.access_key_id or ' ' in self.secret_key:
            raise ValueError("Credentials contain invalid whitespace characters")

    def __repr__(self) -> str:
        return (f"SunxCredentials(access_key_id={self.get_preview()!r}, "
                f"secret_key='***', base_url={self.base_url!r})")


class SigningConfig(Struct, frozen=True):
    """
    Request signing settings.

    Attributes:
        diagnostics: Log the exact string-to-sign at DEBUG for support debugging
    """
    diagnostics: bool = False


class DispatcherConfig(Struct, frozen=True):
    """
    Batch dispatch settings.

    Attributes:
        continue_on_fail: Record per-item errors and keep going instead of aborting
    """
    continue_on_fail: bool = False


class SunxConfig(Struct, frozen=True):
    """
    Complete connector configuration.

    Attributes:
        environment: Environment name (dev, prod, test)
        debug: Debug mode flag; lowers console logging to DEBUG
        credentials: SunX API credentials and base URL
        api_version: Endpoint table version (see ApiVersion)
        network: Transport timeouts
        signing: Signing diagnostics
        dispatcher: Batch failure policy
        logging: Raw ``logging`` section, turned into LoggingConfig on load
    """
    credentials: SunxCredentials
    environment: str = "dev"
    debug: bool = False
    api_version: ApiVersion = ApiVersion.SAPI_V1
    network: NetworkConfig = field(default_factory=NetworkConfig)
    signing: SigningConfig = field(default_factory=SigningConfig)
    dispatcher: DispatcherConfig = field(default_factory=DispatcherConfig)
    logging: Optional[Dict[str, Any]] = None

    def validate(self) -> None:
        self.credentials.validate()
        self.network.validate()
