from .client import ZabbixClient
from .config_types import ClientConfig
from .errors import ApiError, AuthError, ConfigError, NetworkError, ProtocolError, ZabbixClientError
from .params import normalize_params

__all__ = [
    "ZabbixClient",
    "ClientConfig",
    "ApiError",
    "AuthError",
    "ConfigError",
    "NetworkError",
    "ProtocolError",
    "ZabbixClientError",
    "normalize_params",
]
