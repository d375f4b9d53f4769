from __future__ import annotations

import base64
import logging

import httpx
import pytest

from zbxapi_client import ClientConfig, NetworkError

API_URL = "https://zabbix.example.test/api_jsonrpc.php"


def test_json_rpc_content_type(server, make_client) -> None:
    server.on("apiinfo.version", {"result": "6.0.0"})
    client = make_client()

    client.call("apiinfo.version")

    assert server.headers[0]["content-type"] == "application/json-rpc"
    assert "authorization" not in server.headers[0]


def test_basic_auth_header(server, make_client) -> None:
    server.on("apiinfo.version", {"result": "6.0.0"})
    client = make_client(ClientConfig(api_url=API_URL, http_user="web", http_password="secret"))

    client.call("apiinfo.version")
    client.set_basic_authorization(None)
    client.call("apiinfo.version")

    expected = "Basic " + base64.b64encode(b"web:secret").decode("ascii")
    assert server.headers[0]["authorization"] == expected
    assert "authorization" not in server.headers[1]


def test_connect_failure_names_endpoint(server, make_client) -> None:
    def _refuse(envelope):
        raise httpx.ConnectError("connection refused")

    server.on("apiinfo.version", _refuse)
    client = make_client()

    with pytest.raises(NetworkError) as exc_info:
        client.call("apiinfo.version")

    assert str(exc_info.value) == f"could not connect to {API_URL}"
    assert exc_info.value.url == API_URL


def test_read_failure(server, make_client) -> None:
    def _drop(envelope):
        raise httpx.ReadError("connection reset")

    server.on("apiinfo.version", _drop)
    client = make_client()

    with pytest.raises(NetworkError, match="could not read data from"):
        client.call("apiinfo.version")


def test_empty_body(server, make_client) -> None:
    server.on("apiinfo.version", b"")
    client = make_client()

    with pytest.raises(NetworkError, match="could not read data from"):
        client.call("apiinfo.version")


def test_http_error_status_keeps_body(server, make_client, caplog) -> None:
    server.on("apiinfo.version", httpx.Response(500, text="Internal Server Error"))
    client = make_client(ClientConfig(api_url=API_URL, trace=True))

    with caplog.at_level(logging.INFO, logger="zbxapi_client.client"):
        with pytest.raises(NetworkError, match="HTTP 500") as exc_info:
            client.call("apiinfo.version")

    assert exc_info.value.body == "Internal Server Error"
    assert client.last_response == "Internal Server Error"
    assert any("Internal Server Error" in r.getMessage() for r in caplog.records)


def test_empty_body_leaves_no_response(server, make_client) -> None:
    server.on("apiinfo.version", b"")
    client = make_client()

    with pytest.raises(NetworkError):
        client.call("apiinfo.version")
    assert client.last_response == ""
