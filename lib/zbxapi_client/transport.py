from __future__ import annotations

import base64
import logging
import ssl

import httpx

from .config_types import ClientConfig
from .errors import NetworkError

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json-rpc"


def basic_auth_header(user: str, password: str) -> str:
    raw = f"{user}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def ssl_verify(cfg: ClientConfig) -> bool | ssl.SSLContext:
    """Fold the CA/client-cert settings into the single ``verify`` httpx takes."""
    if isinstance(cfg.verify, ssl.SSLContext):
        return cfg.verify
    if cfg.verify is False:
        return False
    if not isinstance(cfg.verify, str) and not cfg.cert:
        return True
    ctx = ssl.create_default_context(cafile=cfg.verify if isinstance(cfg.verify, str) else None)
    if isinstance(cfg.cert, tuple):
        ctx.load_cert_chain(cfg.cert[0], cfg.cert[1])
    elif cfg.cert:
        ctx.load_cert_chain(cfg.cert)
    return ctx


class Transport:
    def __init__(self, cfg: ClientConfig, *, http_transport: httpx.BaseTransport | None = None):
        self._cfg = cfg
        headers = {
            "Content-type": CONTENT_TYPE,
            "User-Agent": cfg.user_agent,
        }
        if cfg.http_user:
            headers["Authorization"] = basic_auth_header(cfg.http_user, cfg.http_password or "")

        self._client = httpx.Client(
            headers=headers,
            verify=ssl_verify(cfg),
            transport=http_transport,
            follow_redirects=True,
        )

    @property
    def url(self) -> str:
        return self._cfg.api_url

    def close(self) -> None:
        self._client.close()

    def post(self, body: str) -> str:
        url = self._cfg.api_url
        try:
            r = self._client.post(url, content=body.encode("utf-8"))
        except (httpx.ConnectError, httpx.ConnectTimeout, httpx.UnsupportedProtocol, httpx.ProxyError) as e:
            raise NetworkError(f"could not connect to {url}", url) from e
        except httpx.RequestError as e:
            raise NetworkError(f"could not read data from {url}", url) from e

        if r.status_code >= 400:
            logger.debug("POST %s returned HTTP %s", url, r.status_code)
            raise NetworkError(f"could not read data from {url} (HTTP {r.status_code})", url, r.text)
        if not r.content:
            raise NetworkError(f"could not read data from {url}", url)
        return r.text
