from __future__ import annotations

import json

import typer

from .. import console
from ..config import config_path, load_config, normalize_api_url, save_config

app = typer.Typer(help="Local client settings.")


@app.command("show")
def show() -> None:
    cfg = load_config()
    token_state = "(set)" if cfg.auth.token else "(empty)"
    console.print(f"config={config_path()}")
    console.print(f"api_url={cfg.api_url} user={cfg.auth.user or '-'} token={token_state}")
    http_user = cfg.http.user or "-"
    console.print(f"http_user={http_user} verify={cfg.http.verify} ca_bundle={cfg.http.ca_bundle or '-'}")
    console.print(f"token_cache_dir={cfg.token_cache_dir or '(default)'}")
    if cfg.default_params:
        console.print(f"default_params={json.dumps(cfg.default_params)}")


@app.command("set")
def set_values(
    api_url: str | None = typer.Option(None, "--api-url", help="Zabbix frontend or api_jsonrpc.php URL."),
    user: str | None = typer.Option(None, "--user", help="Default username for login."),
    http_user: str | None = typer.Option(None, "--http-user", help="HTTP basic auth username."),
    http_password: str | None = typer.Option(None, "--http-password", help="HTTP basic auth password."),
    verify: bool | None = typer.Option(None, "--verify/--insecure", help="Verify TLS certificates."),
    ca_bundle: str | None = typer.Option(None, "--ca-bundle", help="CA bundle used to verify the server."),
    token_cache_dir: str | None = typer.Option(None, "--token-cache-dir", help="Directory for cached tokens."),
    default_params: str | None = typer.Option(None, "--default-params", help="JSON object merged into params."),
) -> None:
    cfg = load_config()

    if api_url is not None:
        cfg.api_url = normalize_api_url(api_url, warn=True)
    if user is not None:
        cfg.auth.user = user
    if http_user is not None:
        cfg.http.user = http_user
    if http_password is not None:
        cfg.http.password = http_password
    if verify is not None:
        cfg.http.verify = verify
    if ca_bundle is not None:
        cfg.http.ca_bundle = ca_bundle
    if token_cache_dir is not None:
        cfg.token_cache_dir = token_cache_dir
    if default_params is not None:
        try:
            parsed = json.loads(default_params)
        except ValueError as e:
            console.err(f"--default-params is not valid JSON: {e}")
            raise typer.Exit(code=2)
        if not isinstance(parsed, dict):
            console.err("--default-params must be a JSON object.")
            raise typer.Exit(code=2)
        cfg.default_params = parsed

    save_config(cfg)
    console.ok("Config updated.")
