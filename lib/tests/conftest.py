from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from zbxapi_client import ClientConfig, ZabbixClient

API_URL = "https://zabbix.example.test/api_jsonrpc.php"


class FakeZabbix:
    """Answers JSON-RPC envelopes from per-method canned replies."""

    def __init__(self) -> None:
        self.envelopes: list[dict[str, Any]] = []
        self.headers: list[httpx.Headers] = []
        self.replies: dict[str, Any] = {}

    def on(self, method: str, reply: Any) -> None:
        self.replies[method] = reply

    def methods(self) -> list[str]:
        return [e["method"] for e in self.envelopes]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        envelope = json.loads(request.content)
        self.envelopes.append(envelope)
        self.headers.append(request.headers)
        reply = self.replies[envelope["method"]]
        if callable(reply):
            reply = reply(envelope)
        if isinstance(reply, httpx.Response):
            return reply
        if isinstance(reply, (str, bytes)):
            return httpx.Response(200, content=reply)
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": envelope["id"], **reply})


@pytest.fixture
def server() -> FakeZabbix:
    return FakeZabbix()


@pytest.fixture
def make_client(server) -> Callable[..., ZabbixClient]:
    def _make(cfg: ClientConfig | None = None, **kwargs) -> ZabbixClient:
        return ZabbixClient(
            cfg or ClientConfig(api_url=API_URL),
            http_transport=httpx.MockTransport(server),
            **kwargs,
        )

    return _make
