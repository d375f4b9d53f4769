from __future__ import annotations

import ssl

import pytest

from zbxapi_client import ClientConfig
from zbxapi_client import transport
from zbxapi_client.transport import Transport, ssl_verify

API_URL = "https://zabbix.example.test/api_jsonrpc.php"


@pytest.fixture
def contexts(monkeypatch) -> list[dict]:
    """Record every context the transport builds instead of reading real files."""
    built: list[dict] = []

    def _create_default_context(cafile=None):
        ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        record = {"cafile": cafile, "cert_chain": [], "ctx": ctx}
        ctx.load_cert_chain = lambda *args: record["cert_chain"].append(args)
        built.append(record)
        return ctx

    monkeypatch.setattr(transport.ssl, "create_default_context", _create_default_context)
    return built


def test_verify_flags_pass_through(contexts) -> None:
    assert ssl_verify(ClientConfig(api_url=API_URL)) is True
    assert ssl_verify(ClientConfig(api_url=API_URL, verify=False)) is False
    assert contexts == []


def test_ca_bundle_path_builds_context(contexts) -> None:
    verify = ssl_verify(ClientConfig(api_url=API_URL, verify="/etc/ssl/zabbix-ca.pem"))

    assert isinstance(verify, ssl.SSLContext)
    assert verify is contexts[0]["ctx"]
    assert contexts[0]["cafile"] == "/etc/ssl/zabbix-ca.pem"
    assert contexts[0]["cert_chain"] == []


def test_given_context_is_used_as_is(contexts) -> None:
    ctx = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    assert ssl_verify(ClientConfig(api_url=API_URL, verify=ctx, cert="/etc/ssl/client.pem")) is ctx
    assert contexts == []


def test_client_cert_file(contexts) -> None:
    verify = ssl_verify(ClientConfig(api_url=API_URL, cert="/etc/ssl/client.pem"))

    assert verify is contexts[0]["ctx"]
    assert contexts[0]["cafile"] is None
    assert contexts[0]["cert_chain"] == [("/etc/ssl/client.pem",)]


def test_client_cert_and_key_pair(contexts) -> None:
    cfg = ClientConfig(
        api_url=API_URL,
        verify="/etc/ssl/zabbix-ca.pem",
        cert=("/etc/ssl/client.crt", "/etc/ssl/client.key"),
    )

    ssl_verify(cfg)

    assert contexts[0]["cafile"] == "/etc/ssl/zabbix-ca.pem"
    assert contexts[0]["cert_chain"] == [("/etc/ssl/client.crt", "/etc/ssl/client.key")]


def test_transport_accepts_built_context(contexts) -> None:
    t = Transport(ClientConfig(api_url=API_URL, cert=("/etc/ssl/client.crt", "/etc/ssl/client.key")))
    t.close()

    assert len(contexts) == 1
    assert contexts[0]["cert_chain"] == [("/etc/ssl/client.crt", "/etc/ssl/client.key")]
