from __future__ import annotations

import typer

from .commands import api_cmd, auth_cmd, config_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="zbxapi",
        help="Zabbix JSON-RPC API client",
        no_args_is_help=True,
    )

    app.add_typer(config_cmd.app, name="config")
    app.command("login")(auth_cmd.login)
    app.command("logout")(auth_cmd.logout)
    app.command("call")(api_cmd.call)
    app.command("version")(api_cmd.version)
    app.command("methods")(api_cmd.methods)

    @app.callback()
    def _main(
            ctx: typer.Context,
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
            trace: bool = typer.Option(False, "--trace", help="Log raw API requests and responses."),
    ):
        setup_logging(verbose, trace=trace)
        ctx.obj = {"trace": trace}

    return app


app = _build_app()
