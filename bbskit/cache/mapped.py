"""Files mapped into memory and shared with other processes."""

from __future__ import annotations

import mmap
import os
from typing import BinaryIO


class MappedFile:
    """A whole file mapped read-write and shared, exposed through ``buf``."""

    def __init__(self, file: BinaryIO) -> None:
        self._file = file
        try:
            self._map = mmap.mmap(file.fileno(), 0)
        except BaseException:
            file.close()
            raise

    @property
    def buf(self) -> mmap.mmap:
        """The mapped bytes; writes go straight to the file."""
        return self._map

    @property
    def closed(self) -> bool:
        return self._map.closed

    def __len__(self) -> int:
        return len(self._map)

    def close(self) -> None:
        """Unmap the file and close it."""
        try:
            self._map.close()
        finally:
            self._file.close()

    def __enter__(self) -> MappedFile:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def create_mmap(file_path: str | os.PathLike, size: int) -> MappedFile:
    """Create (or truncate) ``file_path`` to ``size`` bytes and map it."""
    file = open(file_path, "w+b")
    try:
        file.truncate(size)
    except BaseException:
        file.close()
        raise
    return MappedFile(file)


def open_mmap(file_path: str | os.PathLike) -> MappedFile:
    """Map an existing file read-write."""
    return MappedFile(open(file_path, "r+b"))


def remove_mmap(file_path: str | os.PathLike) -> None:
    """Delete the backing file of a mapping."""
    os.remove(file_path)