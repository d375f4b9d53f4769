import hashlib
import os
import stat

from zbxapi_client.token_cache import TOKEN_FILE_PREFIX, TokenCache


def test_path_for_hashes_username_and_namespace(tmp_path) -> None:
    cache = TokenCache(str(tmp_path), "1000")
    digest = hashlib.md5(b"admin|1000").hexdigest()
    assert cache.path_for("admin") == os.path.join(str(tmp_path), TOKEN_FILE_PREFIX + digest)
    assert TokenCache(str(tmp_path), "1001").path_for("admin") != cache.path_for("admin")


def test_path_for_missing_directory_is_none(tmp_path) -> None:
    assert TokenCache(str(tmp_path / "missing"), "1000").path_for("admin") is None
    assert TokenCache("", "1000").path_for("admin") is None


def test_store_is_owner_only(tmp_path) -> None:
    cache = TokenCache(str(tmp_path))
    path = cache.path_for("admin")
    cache.store(path, "0424bd59b807674191e7d77572075f33")

    assert cache.load(path) == "0424bd59b807674191e7d77572075f33"
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600


def test_store_overwrites_previous_token(tmp_path) -> None:
    cache = TokenCache(str(tmp_path))
    path = cache.path_for("admin")
    cache.store(path, "a-much-longer-old-token")
    cache.store(path, "new")
    assert cache.load(path) == "new"


def test_delete_and_load_missing(tmp_path) -> None:
    cache = TokenCache(str(tmp_path))
    path = cache.path_for("admin")
    cache.store(path, "token")
    cache.delete(path)
    cache.delete(path)
    assert cache.load(path) is None
