from __future__ import annotations

import logging


def setup_logging(verbose: bool, *, trace: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # request/response text is logged at INFO by the client
    if trace:
        logging.getLogger("zbxapi_client").setLevel(logging.DEBUG if verbose else logging.INFO)

    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.DEBUG if verbose else logging.WARNING)


def trace_enabled(ctx) -> bool:
    """Whether the global ``--trace`` flag was given for this invocation."""
    return bool((ctx.obj or {}).get("trace"))
