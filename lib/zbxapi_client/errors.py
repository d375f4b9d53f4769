from __future__ import annotations


class ZabbixClientError(Exception):
    """Base client error."""


class ConfigError(ZabbixClientError):
    """Invalid client configuration."""


class NetworkError(ZabbixClientError):
    """Transport/network layer error."""

    def __init__(self, message: str, url: str | None = None, body: str | None = None):
        super().__init__(message)
        self.url = url
        self.body = body


class ProtocolError(ZabbixClientError):
    """Response body is not a JSON-RPC document."""

    def __init__(self, message: str, body: str | None = None):
        super().__init__(message)
        self.body = body


class ApiError(ZabbixClientError):
    def __init__(self, code: int, message: str, data: str | None = None):
        super().__init__(f"API error {code}: {data or message}")
        self.code = code
        self.message = message
        self.data = data


class AuthError(ApiError):
    """Login or session related API error."""
