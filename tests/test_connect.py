import pytest

from bbskit.cache.connect import CacheError, new_cache
from bbskit.cache.mapped import create_mmap


def test_new_cache_with_file_scheme(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    data = create_mmap("./test", 20)
    data.buf[0] = 42
    data.close()

    cache = new_cache("file:./test")
    assert cache.buf[0] == 42
    cache.buf[0] = 43
    cache.close()

    assert (tmp_path / "test").read_bytes()[0] == 43


def test_new_cache_bare_path(tmp_path):
    path = tmp_path / "bare.shm"
    path.write_bytes(b"\x05\x06\x07")
    with new_cache(str(path)) as cache:
        assert cache.buf[:] == b"\x05\x06\x07"


def test_new_cache_unknown_scheme():
    with pytest.raises(CacheError, match="unsupport scheme: http"):
        new_cache("http:whatever")


def test_new_cache_bad_shm_key():
    with pytest.raises(CacheError, match="atoi error"):
        new_cache("shmkey:abc")


def test_new_cache_shm_key_unsupported():
    with pytest.raises(CacheError, match="not supported"):
        new_cache("shmkey:10")


def test_new_cache_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        new_cache(f"file:{tmp_path / 'missing'}")