from __future__ import annotations

import ssl
from dataclasses import dataclass


@dataclass(frozen=True)
class ClientConfig:
    api_url: str
    http_user: str | None = None
    http_password: str | None = None
    verify: bool | str | ssl.SSLContext = True
    cert: str | tuple[str, str] | None = None
    trace: bool = False
    user_agent: str = "zbxapi-client/0.1.0"
