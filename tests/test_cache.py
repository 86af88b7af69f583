import struct

import pytest

from bbskit.cache.connect import CacheError
from bbskit.cache.mapped import create_mmap
from bbskit.pttbbs.cache import MemoryMappingSetting, SharedCache


def test_get_version():
    settings = MemoryMappingSetting(alignment_bytes=2, max_users=10, id_len=12)
    cache = SharedCache(bytes([12, 0, 0, 0]), settings)
    assert cache.version() == 12


@pytest.mark.parametrize("alignment", [1, 2, 4, 8])
def test_alignment_of_next_in_hash(alignment):
    settings = MemoryMappingSetting(alignment_bytes=alignment, max_users=10, id_len=12)
    cache = SharedCache(b"", settings)
    assert cache.layout.next_in_hash % alignment == 0
    assert cache.layout.money == cache.layout.next_in_hash + 4 + 10 * 4


def test_cool_down_shifts_hash_head():
    plain = SharedCache(b"", MemoryMappingSetting(max_users=5, id_len=12))
    cool = SharedCache(b"", MemoryMappingSetting(max_users=5, id_len=12, use_cool_down=True))
    assert plain.layout.cooldown_time is None
    assert cool.layout.cooldown_time is not None
    assert cool.layout.hash_head == plain.layout.hash_head + 5 * 4


def test_user_id_and_money():
    settings = MemoryMappingSetting(max_users=2, id_len=12)
    probe = SharedCache(b"", settings)
    buf = bytearray(probe.layout.user_info + 16)
    struct.pack_into("<I", buf, 0, 4842)
    buf[8:13] = b"SYSOP"
    buf[21:27] = b"test01"
    struct.pack_into("<i", buf, probe.layout.money, 1000)
    struct.pack_into("<i", buf, probe.layout.money + 4, -5)

    cache = SharedCache(buf, settings)

    assert cache.version() == 4842
    assert cache.user_id(0) == "SYSOP"
    assert cache.user_id(1) == "test01"
    assert cache.money(0) == 1000
    assert cache.money(1) == -5


def test_uid_out_of_range():
    cache = SharedCache(bytes(256), MemoryMappingSetting(max_users=2, id_len=12))
    with pytest.raises(IndexError):
        cache.user_id(2)
    with pytest.raises(IndexError):
        cache.money(-1)


def test_user_info_uses_configured_length():
    settings = MemoryMappingSetting(max_users=1, id_len=12, user_info_length=4)
    probe = SharedCache(b"", settings)
    buf = bytearray(probe.layout.user_info + 8)
    buf[probe.layout.user_info + 4 : probe.layout.user_info + 8] = b"abcd"
    assert SharedCache(buf, settings).user_info(1) == b"abcd"
    assert SharedCache(buf, MemoryMappingSetting(max_users=1)).user_info(0) == b""


def test_invalid_alignment():
    with pytest.raises(ValueError):
        MemoryMappingSetting(alignment_bytes=0)


def test_open_from_file(tmp_path):
    path = tmp_path / "bbs.shm"
    with create_mmap(path, 64) as mapped:
        mapped.buf[0:4] = struct.pack("<I", 4842)

    with SharedCache.open(f"file:{path}", MemoryMappingSetting(max_users=1)) as cache:
        assert cache.version() == 4842


def test_open_bad_scheme():
    with pytest.raises(CacheError):
        SharedCache.open("bogus:thing", MemoryMappingSetting())


def test_open_missing_file(tmp_path):
    with pytest.raises(CacheError):
        SharedCache.open(f"file:{tmp_path / 'missing.shm'}", MemoryMappingSetting())