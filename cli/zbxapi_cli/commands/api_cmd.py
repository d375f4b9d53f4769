from __future__ import annotations

import json

import typer
from rich.table import Table

from zbxapi_client import ApiError, ZabbixClientError
from zbxapi_client.methods import API_METHODS, python_name

from .. import console
from ..config import load_config
from ..http import make_client
from ..logging_ import trace_enabled

def _parse_params(raw: str | None):
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        console.err(f"--params is not valid JSON: {e}")
        raise typer.Exit(code=2)


def call(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="API method, e.g. host.get."),
    params: str | None = typer.Option(None, "--params", "-p", help="Method params as JSON."),
    key: str | None = typer.Option(None, "--key", "-k", help="Re-key a list result by this field."),
    api_url: str | None = typer.Option(None, "--api-url", help="Override API URL."),
):
    """Call any API method and print its result as JSON."""
    payload = _parse_params(params)
    cfg = load_config()
    client = make_client(cfg, api_url_override=api_url, trace=trace_enabled(ctx))
    try:
        result = client.request(method, payload, key)
    except ApiError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    except ZabbixClientError as e:
        console.err(str(e))
        raise typer.Exit(code=1)
    finally:
        client.close()
    console.print_json(result)


def version(
    ctx: typer.Context,
    api_url: str | None = typer.Option(None, "--api-url", help="Override API URL."),
):
    """Print the API version reported by the server."""
    cfg = load_config()
    client = make_client(cfg, api_url_override=api_url, trace=trace_enabled(ctx), with_token=False)
    try:
        result = client.apiinfo_version()
    except ZabbixClientError as e:
        console.err(str(e))
        raise typer.Exit(code=2 if isinstance(e, ApiError) else 1)
    finally:
        client.close()
    console.print(result)


def methods(
    filter_: str | None = typer.Option(None, "--filter", "-f", help="Only methods containing this text."),
):
    """List the API methods known to the client."""
    table = Table(title="API methods")
    table.add_column("Method")
    table.add_column("Python name")
    table.add_column("Auth")
    needle = (filter_ or "").lower()
    for method in sorted(API_METHODS):
        if needle and needle not in method.lower():
            continue
        table.add_row(method, python_name(method), "yes" if API_METHODS[method] else "no")
    console.print(table)
