from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

import httpx

from .config_types import ClientConfig
from .errors import ApiError, AuthError, ConfigError, NetworkError, ProtocolError, ZabbixClientError
from .methods import METHOD_BY_NAME, requires_auth as method_requires_auth
from .params import normalize_params
from .token_cache import TokenCache
from .transport import Transport

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"
LOGIN_METHOD = "user.login"
LOGOUT_METHOD = "user.logout"
PROBE_METHOD = "user.get"

_SESSION_ERROR_MARKERS = ("not authorised", "not authorized", "session terminated", "re-login")


def request_id() -> str:
    """Digits of the current time with four fractional places."""
    return f"{time.time():.4f}".replace(".", "")


def rekey_result(result: Any, key_field: str | None) -> Any:
    """Turn a list of objects into a dict keyed by ``key_field``.

    Anything that is not a non-empty list of objects carrying the field is
    returned unchanged.
    """
    if not key_field or not isinstance(result, list) or not result:
        return result
    for item in result:
        if not isinstance(item, dict) or not isinstance(item.get(key_field), (str, int)):
            return result
    return {item[key_field]: item for item in result}


def _api_error(method: str, error: Any) -> ApiError:
    if not isinstance(error, dict):
        error = {"message": str(error)}
    try:
        code = int(error.get("code", 0))
    except (TypeError, ValueError):
        code = 0
    message = str(error.get("message") or "")
    data = error.get("data")
    data = str(data) if data is not None else None

    text = f"{message} {data or ''}".lower()
    if method == LOGIN_METHOD or any(marker in text for marker in _SESSION_ERROR_MARKERS):
        return AuthError(code, message, data)
    return ApiError(code, message, data)


class ZabbixClient:
    """Zabbix JSON-RPC API client.

    Every API method is reachable as ``client.<object>_<method>(params, result_key_field)``,
    e.g. ``client.host_get({"output": "extend"}, "hostid")``.

    An instance is meant for a single caller; it holds no locks.
    """

    def __init__(
            self,
            cfg: ClientConfig,
            *,
            user: str | None = None,
            password: str | None = None,
            auth_token: str | None = None,
            token_cache_dir: str | None = None,
            cache_namespace: str = "",
            http_transport: httpx.BaseTransport | None = None,
    ):
        self._cfg = cfg
        self._http_transport = http_transport
        self._t = Transport(cfg, http_transport=http_transport)
        self._auth_token = ""
        self._default_params: dict[str, Any] = {}
        self._cache_namespace = cache_namespace
        self._last_request = ""
        self._last_response = ""

        if auth_token:
            self._auth_token = auth_token
        elif user and password:
            try:
                self.login({"user": user, "password": password}, token_cache_dir=token_cache_dir)
            except Exception:
                self._t.close()
                raise

    def __enter__(self) -> ZabbixClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __getattr__(self, name: str):
        method = METHOD_BY_NAME.get(name)
        if method is None:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

        def wrapper(params: Any = None, result_key_field: str | None = None) -> Any:
            return self.request(method, params, result_key_field)

        wrapper.__name__ = name
        wrapper.__doc__ = f"Call the ``{method}`` API method."
        return wrapper

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(METHOD_BY_NAME))

    def close(self) -> None:
        self._t.close()

    # --- configuration ---
    @property
    def api_url(self) -> str:
        return self._cfg.api_url

    def set_api_url(self, api_url: str) -> None:
        self._reconfigure(replace(self._cfg, api_url=api_url))

    def set_basic_authorization(self, user: str | None, password: str | None = None) -> None:
        self._reconfigure(replace(self._cfg, http_user=user or None, http_password=password or None))

    def print_communication(self, enabled: bool = True) -> None:
        self._cfg = replace(self._cfg, trace=enabled)

    @property
    def default_params(self) -> dict[str, Any]:
        return dict(self._default_params)

    def set_default_params(self, params: Mapping[str, Any]) -> None:
        if not isinstance(params, Mapping):
            raise ConfigError(f"default params must be a mapping, got {type(params).__name__}")
        self._default_params = dict(params)

    @property
    def auth_token(self) -> str:
        return self._auth_token

    def set_auth_token(self, token: str | None) -> None:
        self._auth_token = token or ""

    @property
    def last_request(self) -> str:
        return self._last_request

    @property
    def last_response(self) -> str:
        return self._last_response

    def _reconfigure(self, cfg: ClientConfig) -> None:
        self._t.close()
        self._cfg = cfg
        self._t = Transport(cfg, http_transport=self._http_transport)

    # --- core ---
    def call(
            self,
            method: str,
            params: Any = None,
            result_key_field: str | None = None,
            requires_auth: bool | None = None,
    ) -> Any:
        """Send one JSON-RPC request and return its ``result``.

        ``params`` goes on the wire as given. ``requires_auth`` defaults to the
        method table; when true the envelope carries ``auth`` even if no token
        is held.
        """
        if requires_auth is None:
            requires_auth = method_requires_auth(method)

        envelope: dict[str, Any] = {
            "jsonrpc": JSONRPC_VERSION,
            "method": method,
            "params": [] if params is None else params,
            "id": request_id(),
        }
        if requires_auth:
            envelope["auth"] = self._auth_token or None

        self._last_request = json.dumps(envelope, separators=(",", ":"))
        self._last_response = ""
        logger.debug("calling %s", method)
        if self._cfg.trace:
            logger.info("API request: %s", self._last_request)

        try:
            body = self._t.post(self._last_request)
        except NetworkError as e:
            if e.body:
                self._last_response = e.body
                if self._cfg.trace:
                    logger.info("API response: %s", e.body)
            raise
        self._last_response = body
        if self._cfg.trace:
            logger.info("API response: %s", body)

        try:
            data = json.loads(body)
        except ValueError as e:
            raise ProtocolError("could not decode JSON response", body) from e
        if not isinstance(data, (dict, list)):
            raise ProtocolError("could not decode JSON response", body)

        if isinstance(data, dict) and "error" in data:
            raise _api_error(method, data["error"])
        if not isinstance(data, dict) or "result" not in data:
            raise ProtocolError("JSON-RPC response carries no result", body)

        return rekey_result(data["result"], result_key_field)

    def request(self, method: str, params: Any = None, result_key_field: str | None = None) -> Any:
        """Normalize ``params`` and call ``method``."""
        return self.call(method, normalize_params(params, self._default_params), result_key_field)

    # --- session ---
    def login(
            self,
            params: Any = None,
            result_key_field: str | None = None,
            token_cache_dir: str | None = None,
    ) -> str:
        """Authenticate and return the session token.

        With ``token_cache_dir`` a token cached for the same user is reused
        when a ``user.get`` probe accepts it; a rejected token is deleted and
        a real login follows.
        """
        self._auth_token = ""
        params = normalize_params(params, self._default_params)

        cache: TokenCache | None = None
        cache_path: str | None = None
        username = None
        if isinstance(params, dict):
            username = params.get("user") or params.get("username")
        if token_cache_dir and username:
            cache = TokenCache(token_cache_dir, self._cache_namespace)
            cache_path = cache.path_for(str(username))

        if cache is not None and cache_path and os.path.isfile(cache_path):
            self._auth_token = cache.load(cache_path) or ""
            try:
                self.call(PROBE_METHOD, [], requires_auth=True)
            except ZabbixClientError as e:
                logger.info("cached token rejected (%s), logging in again", e)
                self._auth_token = ""
                cache.delete(cache_path)
            else:
                return self._auth_token

        result = self.call(LOGIN_METHOD, params, result_key_field, requires_auth=False)
        # userData=true returns the user object with the token under sessionid
        token = result.get("sessionid") if isinstance(result, dict) else result
        if not isinstance(token, str) or not token:
            raise ProtocolError(f"{LOGIN_METHOD} returned no token", self._last_response)
        self._auth_token = token

        if cache is not None and cache_path:
            cache.store(cache_path, token)
        return token

    def logout(self, params: Any = None, result_key_field: str | None = None) -> Any:
        result = self.call(
            LOGOUT_METHOD,
            normalize_params(params, self._default_params),
            result_key_field,
            requires_auth=True,
        )
        self._auth_token = ""
        return result

    def user_login(
            self,
            params: Any = None,
            result_key_field: str | None = None,
            token_cache_dir: str | None = None,
    ) -> str:
        return self.login(params, result_key_field, token_cache_dir)

    def user_logout(self, params: Any = None, result_key_field: str | None = None) -> Any:
        return self.logout(params, result_key_field)
