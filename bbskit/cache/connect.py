"""Opening a shared cache from a connection string."""

from __future__ import annotations

from .mapped import MappedFile, open_mmap


class CacheError(Exception):
    """Raised when a cache connection string cannot be used."""


def new_cache(connection_string: str) -> MappedFile:
    """Open the cache named by ``connection_string``.

    Accepted forms are ``file:<path>``, ``shmkey:<key>`` and a bare path,
    which is mapped as a file.
    """
    parts = connection_string.split(":")
    if len(parts) == 1:
        return open_mmap(parts[0])

    scheme = parts[0]
    if scheme == "shmkey":
        try:
            key = int(parts[1])
        except ValueError as exc:
            raise CacheError(f"atoi error: {exc}") from exc
        raise CacheError(f"System V shared memory is not supported (key {key})")
    if scheme == "file":
        return open_mmap(parts[1])
    raise CacheError(f"unsupport scheme: {scheme}")