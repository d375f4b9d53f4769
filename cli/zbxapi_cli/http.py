from __future__ import annotations

import os

from zbxapi_client import ZabbixClient
from zbxapi_client.config_types import ClientConfig

from .config import AppConfig, normalize_api_url, resolve_api_url

CLIENT_VERSION = "0.1.0"


def cache_namespace() -> str:
    """Effective OS uid of this process, scoping cached tokens per local account."""
    getuid = getattr(os, "getuid", None)
    return str(getuid()) if getuid is not None else ""


def make_client(
    cfg: AppConfig,
    *,
    api_url_override: str | None = None,
    trace: bool = False,
    with_token: bool = True,
) -> ZabbixClient:
    api_url = normalize_api_url(api_url_override, warn=True) if api_url_override else resolve_api_url(cfg)
    verify: bool | str = cfg.http.verify
    if verify and cfg.http.ca_bundle:
        verify = cfg.http.ca_bundle

    client = ZabbixClient(
        ClientConfig(
            api_url=api_url,
            http_user=cfg.http.user or None,
            http_password=cfg.http.password or None,
            verify=verify,
            trace=trace,
            user_agent=f"zbxapi-cli/{CLIENT_VERSION}",
        ),
        auth_token=(cfg.auth.token or None) if with_token else None,
        cache_namespace=cache_namespace(),
    )
    if cfg.default_params:
        client.set_default_params(cfg.default_params)
    return client
