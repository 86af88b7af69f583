"""Reading the shared-memory cache of a running PTT-style BBS."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from ..cache.connect import CacheError, new_cache
from ..cache.mapped import MappedFile
from ..cstr import cstr_to_bytes


@dataclass
class MemoryMappingSetting:
    """Compile-time parameters of the BBS that fix the cache layout.

    ``alignment_bytes`` is 1, 2, 4 or 8; 1 means no alignment padding.
    """

    alignment_bytes: int = 1
    max_users: int = 0
    id_len: int = 12
    use_cool_down: bool = False
    hash_bits: int = 0
    user_info_length: int = 0

    def __post_init__(self) -> None:
        if self.alignment_bytes < 1:
            raise ValueError("alignment_bytes must be at least 1")


@dataclass(frozen=True)
class _CacheLayout:
    version: int
    size: int
    user_id: int
    next_in_hash: int
    money: int
    cooldown_time: int | None
    hash_head: int
    user_number: int
    user_loaded: int
    user_info: int

    @classmethod
    def compute(cls, settings: MemoryMappingSetting) -> _CacheLayout:
        version = 0
        size = version + 4
        user_id = size + 4
        id_width = settings.id_len + 1

        next_in_hash = id_width + user_id + settings.max_users * id_width
        remainder = next_in_hash % settings.alignment_bytes
        if remainder:
            next_in_hash += settings.alignment_bytes - remainder

        money = 4 + next_in_hash + settings.max_users * 4
        if settings.use_cool_down:
            cooldown_time: int | None = 4 + money + settings.max_users * 4
            hash_head = 4 + cooldown_time + settings.max_users * 4
        else:
            cooldown_time = None
            hash_head = 4 + 4 + money + settings.max_users * 4

        user_number = 4 + hash_head + (1 << settings.hash_bits) * 4
        user_loaded = user_number + 4
        user_info = user_loaded + 4
        return cls(
            version, size, user_id, next_in_hash, money, cooldown_time,
            hash_head, user_number, user_loaded, user_info,
        )


class SharedCache:
    """Typed access to the BBS shared cache.

    Field positions depend on how the BBS was compiled; they are worked out
    from the :class:`MemoryMappingSetting` given.
    """

    def __init__(
        self,
        buf,
        settings: MemoryMappingSetting,
        *,
        backing: MappedFile | None = None,
    ) -> None:
        self._buf = buf
        self.settings = settings
        self.layout = _CacheLayout.compute(settings)
        self._backing = backing

    @classmethod
    def open(cls, connection_string: str, settings: MemoryMappingSetting) -> SharedCache:
        """Open the cache named by a connection string such as ``file:/path``."""
        try:
            mapped = new_cache(connection_string)
        except CacheError as exc:
            raise CacheError(f"cache open error: {exc}") from exc
        except OSError as exc:
            raise CacheError(f"cache open error: {exc}") from exc
        return cls(mapped.buf, settings, backing=mapped)

    def _check_uid(self, uid: int) -> None:
        if not 0 <= uid < self.settings.max_users:
            raise IndexError(f"uid {uid} out of range")

    def version(self) -> int:
        """The cache layout version; 4842 on current systems."""
        return struct.unpack_from("<I", self._buf, self.layout.version)[0]

    def user_id(self, uid: int) -> str:
        """The user id at zero-based index ``uid`` of the password file."""
        self._check_uid(uid)
        width = self.settings.id_len + 1
        start = self.layout.user_id + width * uid
        raw = cstr_to_bytes(self._buf[start : start + width])
        return raw.decode("utf-8", errors="replace")

    def money(self, uid: int) -> int:
        """The money held by the user at zero-based index ``uid``."""
        self._check_uid(uid)
        return struct.unpack_from("<i", self._buf, self.layout.money + 4 * uid)[0]

    def user_info(self, uid: int) -> bytes:
        """The raw online-user record at index ``uid``."""
        length = self.settings.user_info_length
        start = self.layout.user_info + length * uid
        return bytes(self._buf[start : start + length])

    def close(self) -> None:
        """Release the mapping behind the cache, if this object opened it."""
        if self._backing is not None:
            self._backing.close()
            self._backing = None

    def __enter__(self) -> SharedCache:
        return self

    def __exit__(self, *args) -> None:
        self.close()