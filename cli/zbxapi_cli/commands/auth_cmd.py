from __future__ import annotations

import typer

from zbxapi_client import ApiError, ZabbixClientError
from zbxapi_client.token_cache import TokenCache

from .. import console
from ..config import load_config, resolve_token_cache_dir, save_config
from ..http import cache_namespace, make_client
from ..logging_ import trace_enabled


def login(
    ctx: typer.Context,
    user: str | None = typer.Option(None, "--user", help="Zabbix username; defaults to the configured user."),
    password: str = typer.Option(..., "--password", prompt=True, hide_input=True, help="Zabbix password."),
    api_url: str | None = typer.Option(None, "--api-url", help="Override API URL."),
    no_cache: bool = typer.Option(False, "--no-cache", help="Skip the on-disk token cache."),
):
    """Log in, reusing a cached session token when the server still accepts it."""
    cfg = load_config()
    user = user or cfg.auth.user or typer.prompt("User")
    client = make_client(cfg, api_url_override=api_url, trace=trace_enabled(ctx), with_token=False)
    cache_dir = None if no_cache else resolve_token_cache_dir(cfg)
    try:
        token = client.login({"user": user, "password": password}, token_cache_dir=cache_dir)
    except ApiError as e:
        console.err(f"Login failed: {e}")
        raise typer.Exit(code=2)
    except ZabbixClientError as e:
        console.err(f"Login failed: {e}")
        raise typer.Exit(code=1)
    finally:
        client.close()

    cfg.auth.user = user
    cfg.auth.token = token
    save_path = save_config(cfg)
    console.ok(f"Login successful. Token saved to {save_path}.")


def logout(
    ctx: typer.Context,
    api_url: str | None = typer.Option(None, "--api-url", help="Override API URL."),
):
    """End the API session and forget the saved token."""
    cfg = load_config()
    if not cfg.auth.token:
        console.warn("No saved session.")
        return

    client = make_client(cfg, api_url_override=api_url, trace=trace_enabled(ctx))
    try:
        client.logout()
    except ApiError as e:
        console.err(f"Logout failed: {e}")
        raise typer.Exit(code=2)
    except ZabbixClientError as e:
        console.err(f"Logout failed: {e}")
        raise typer.Exit(code=1)
    finally:
        client.close()

    if cfg.auth.user:
        cache = TokenCache(resolve_token_cache_dir(cfg), cache_namespace())
        path = cache.path_for(cfg.auth.user)
        if path:
            cache.delete(path)
    cfg.auth.token = ""
    save_path = save_config(cfg)
    console.ok(f"Logged out. Token cleared from {save_path}.")