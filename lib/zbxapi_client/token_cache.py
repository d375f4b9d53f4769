from __future__ import annotations

import hashlib
import logging
import os

logger = logging.getLogger(__name__)

TOKEN_FILE_PREFIX = ".zabbixapi-token-"


class TokenCache:
    """Session tokens persisted one file per (username, namespace) pair.

    Reads and writes are not coordinated across processes.
    """

    def __init__(self, directory: str, namespace: str = ""):
        self.directory = directory
        self.namespace = namespace

    def path_for(self, username: str) -> str | None:
        if not self.directory or not os.path.isdir(self.directory):
            return None
        digest = hashlib.md5(f"{username}|{self.namespace}".encode("utf-8")).hexdigest()
        return os.path.join(self.directory, TOKEN_FILE_PREFIX + digest)

    def load(self, path: str) -> str | None:
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def store(self, path: str, token: str) -> None:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(token)
        os.chmod(path, 0o600)
        logger.debug("token cached at %s", path)

    def delete(self, path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            return
        logger.debug("removed stale token cache %s", path)
