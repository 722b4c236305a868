from .client import RelinkClient
from .config import resolve_client_config
from .config_types import ClientConfig, RequestConfig, merge_request_config
from .errors import ApiError, AuthError, ConfigError, NetworkError, RelinkClientError, TransportError

__all__ = [
    "RelinkClient",
    "ClientConfig",
    "RequestConfig",
    "merge_request_config",
    "resolve_client_config",
    "RelinkClientError",
    "ConfigError",
    "TransportError",
    "ApiError",
    "AuthError",
    "NetworkError",
]
