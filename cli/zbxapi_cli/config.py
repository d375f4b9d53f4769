from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_cache_dir, user_config_dir

from . import console

APP_NAME = "zbxapi"
CONFIG_FILENAME = "config.toml"
API_PATH = "/api_jsonrpc.php"
ENV_API_URL = "ZBXAPI_URL"

_WARNED_API_URL_SCHEME = False


@dataclass
class AuthConfig:
    user: str = ""
    token: str = ""


@dataclass
class HttpConfig:
    user: str = ""
    password: str = ""
    verify: bool = True
    ca_bundle: str = ""


@dataclass
class AppConfig:
    api_url: str
    auth: AuthConfig
    http: HttpConfig = field(default_factory=HttpConfig)
    token_cache_dir: str = ""
    default_params: dict[str, Any] = field(default_factory=dict)


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_token_cache_dir() -> str:
    return user_cache_dir(APP_NAME)


def default_config() -> AppConfig:
    return AppConfig(
        api_url=f"http://127.0.0.1{API_PATH}",
        auth=AuthConfig(),
        http=HttpConfig(),
        token_cache_dir="",
        default_params={},
    )


def normalize_api_url(raw: str | None, *, warn: bool = False) -> str:
    """Add a scheme and the JSON-RPC endpoint path when missing."""
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if not (lowered.startswith("http://") or lowered.startswith("https://")):
        host = value.split("/", 1)[0]
        host = host.split(":", 1)[0].lower()
        scheme = "http://" if host in {"localhost", "127.0.0.1", "0.0.0.0"} else "https://"
        value = f"{scheme}{value}"
        if warn:
            _warn_missing_scheme(value)
    if not value.endswith(".php"):
        value = f"{value}{API_PATH}"
    return value


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_API_URL_SCHEME
    if _WARNED_API_URL_SCHEME:
        return
    if not _is_interactive():
        return
    console.warn(f"api_url missing scheme, assuming {normalized}")
    _WARNED_API_URL_SCHEME = True


def _is_interactive() -> bool:
    import sys
    return bool(sys.stderr.isatty() or sys.stdout.isatty())


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "api_url": cfg.api_url,
        "token_cache_dir": cfg.token_cache_dir,
        "auth": {
            "user": cfg.auth.user,
            "token": cfg.auth.token,
        },
        "http": {
            "user": cfg.http.user,
            "password": cfg.http.password,
            "verify": cfg.http.verify,
            "ca_bundle": cfg.http.ca_bundle,
        },
        "default_params": cfg.default_params,
    }


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    api_url = normalize_api_url(str(data.get("api_url") or ""), warn=True)
    if api_url:
        cfg.api_url = api_url
    cfg.token_cache_dir = str(data.get("token_cache_dir") or "").strip()

    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        cfg.auth = AuthConfig(
            user=str(auth_raw.get("user") or ""),
            token=str(auth_raw.get("token") or ""),
        )

    http_raw = data.get("http") or {}
    if isinstance(http_raw, dict):
        verify = http_raw.get("verify", True)
        cfg.http = HttpConfig(
            user=str(http_raw.get("user") or ""),
            password=str(http_raw.get("password") or ""),
            verify=verify if isinstance(verify, bool) else True,
            ca_bundle=str(http_raw.get("ca_bundle") or ""),
        )

    defaults_raw = data.get("default_params") or {}
    if isinstance(defaults_raw, dict):
        cfg.default_params = dict(defaults_raw)
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return default_config()
    return from_toml(data)


def resolve_api_url(cfg: AppConfig) -> str:
    env_value = os.getenv(ENV_API_URL, "").strip()
    if env_value:
        return normalize_api_url(env_value)
    return cfg.api_url


def resolve_token_cache_dir(cfg: AppConfig) -> str:
    path = cfg.token_cache_dir or default_token_cache_dir()
    os.makedirs(path, mode=0o700, exist_ok=True)
    return path


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path
