"""Article headers (``.DIR`` records) of a FormosaBBS system."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..big5 import big5_to_utf8

STR_LENGTH = 80
FILE_HEADER_RECORD_LENGTH = 248

POS_FILENAME = 0
POS_OWNER = STR_LENGTH
POS_POSTNO = STR_LENGTH - 8
POS_MODIFIED = POS_OWNER + STR_LENGTH - 8
POS_TITLE = POS_OWNER + STR_LENGTH

_FILENAME_WIDTH = 44
_OWNER_WIDTH = 72
_TITLE_WIDTH = 67

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


def _text(data: bytes) -> str:
    return data.strip(b"\x00").decode("utf-8", errors="replace")


@dataclass
class FileHeader:
    """One article record; ``modified`` is UTC."""

    filename: str = ""
    modified: datetime = field(default=_EPOCH)
    recommend: int = 0
    owner: str = ""
    date: str = ""
    title: str = ""
    money: int = 0
    anno_uid: int = 0
    refer_ref: int = 0
    refer_flag: bool = False
    filemode: int = 0
    postno: int = 0

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> FileHeader:
        """Decode one 248-byte on-disk record."""
        data = bytes(data)
        if len(data) < FILE_HEADER_RECORD_LENGTH:
            raise ValueError(
                f"file header needs {FILE_HEADER_RECORD_LENGTH} bytes, got {len(data)}"
            )
        modified = struct.unpack_from("<I", data, POS_MODIFIED)[0]
        return cls(
            filename=_text(data[POS_FILENAME : POS_FILENAME + _FILENAME_WIDTH]),
            modified=datetime.fromtimestamp(modified, tz=timezone.utc),
            owner=_text(data[POS_OWNER : POS_OWNER + _OWNER_WIDTH]),
            title=big5_to_utf8(data[POS_TITLE : POS_TITLE + _TITLE_WIDTH].strip(b"\x00")),
            postno=struct.unpack_from("<i", data, POS_POSTNO)[0],
        )


def open_formosa_file_header_file(filename: str | os.PathLike) -> list[FileHeader]:
    """Read every record of a ``.DIR`` file.

    A short trailing record is padded with NUL bytes before decoding.
    """
    headers: list[FileHeader] = []
    with open(filename, "rb") as file:
        while chunk := file.read(FILE_HEADER_RECORD_LENGTH):
            headers.append(
                FileHeader.from_bytes(chunk.ljust(FILE_HEADER_RECORD_LENGTH, b"\x00"))
            )
    return headers