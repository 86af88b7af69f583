"""Board headers (``.BRD`` records) of a PTT-style BBS."""

from __future__ import annotations

import enum
import os
import struct
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ..big5 import big5_to_utf8, utf8_to_big5
from ..cstr import cstr_to_bytes

ID_LENGTH = 12
BOARD_TITLE_LENGTH = 48
BOARD_HEADER_RECORD_LENGTH = 256

PERM_SYSOP = 0o40000
PERM_BM = 0o2000

_EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)

POS_BOARD_NAME = 0
POS_BOARD_TITLE = POS_BOARD_NAME + ID_LENGTH + 1
POS_BM = POS_BOARD_TITLE + BOARD_TITLE_LENGTH + 1
POS_BRD_ATTR = 3 + POS_BM + ID_LENGTH * 3 + 3
POS_CHESS_COUNTRY = POS_BRD_ATTR + 4
POS_VOTE_LIMIT_POSTS = POS_CHESS_COUNTRY + 1
POS_VOTE_LIMIT_LOGINS = POS_VOTE_LIMIT_POSTS + 1
POS_B_UPDATE = 1 + POS_VOTE_LIMIT_LOGINS + 1
POS_POST_LIMIT_POSTS = POS_B_UPDATE + 4
POS_POST_LIMIT_LOGINS = POS_POST_LIMIT_POSTS + 1
POS_B_VOTE = 1 + POS_POST_LIMIT_LOGINS + 1
POS_V_TIME = POS_B_VOTE + 1
POS_LEVEL = POS_V_TIME + 4
POS_PERM_RELOAD = POS_LEVEL + 4
POS_GID = POS_PERM_RELOAD + 4
POS_NEXT = POS_GID + 4
POS_FIRST_CHILD = POS_NEXT + 4 * 2
POS_PARENT = POS_FIRST_CHILD + 4 * 2
POS_CHILD_COUNT = POS_PARENT + 4
POS_NUSER = POS_CHILD_COUNT + 4
POS_POST_EXPIRE = POS_NUSER + 4
POS_END_GAMBLE = POS_POST_EXPIRE + 4
POS_POST_TYPE = POS_END_GAMBLE + 4
POS_POST_TYPE_F = POS_POST_TYPE + 33
POS_FAST_RECOMMEND_PAUSE = POS_POST_TYPE_F + 1
POS_VOTE_LIMIT_BAD_POST = POS_FAST_RECOMMEND_PAUSE + 1
POS_POST_LIMIT_BAD_POST = POS_VOTE_LIMIT_BAD_POST + 1
POS_SR_EXPIRE = 3 + POS_POST_LIMIT_BAD_POST + 1

_NAME_WIDTH = ID_LENGTH + 1
_TITLE_WIDTH = BOARD_TITLE_LENGTH + 1
_BM_WIDTH = ID_LENGTH * 3 + 3
_POST_TYPE_WIDTH = 33


class BoardAttr(enum.IntFlag):
    """Bits of a board's ``brdattr`` field."""

    NO_COUNT = 0x00000002
    GROUP_BOARD = 0x00000008
    HIDE = 0x00000010
    POST_MASK = 0x00000020
    ANONYMOUS = 0x00000040
    DEFAULT_ANONYMOUS = 0x00000080
    NO_CREDIT = 0x00000100
    VOTE_BOARD = 0x00000200
    WARN_EL = 0x00000400
    TOP = 0x00000800
    NO_RECOMMEND = 0x00001000
    ANGEL_ANONYMOUS = 0x00002000
    BM_COUNT = 0x00004000
    SYMBOLIC = 0x00008000
    NO_BOO = 0x00010000
    RESTRICTED_POST = 0x00040000
    GUEST_POST = 0x00080000
    COOLDOWN = 0x00100000
    CP_LOG = 0x00200000
    NO_FAST_RECOMMEND = 0x00400000
    IP_LOG_RECOMMEND = 0x00800000
    OVER18 = 0x01000000
    NO_REPLY = 0x02000000
    ALIGNED_COMMENT = 0x04000000
    NO_SELF_DELETE_POST = 0x08000000
    BM_MASK_CONTENT = 0x10000000


def _u32(data: bytes, pos: int) -> int:
    return struct.unpack_from("<I", data, pos)[0]


def _i32(data: bytes, pos: int) -> int:
    return struct.unpack_from("<i", data, pos)[0]


def _time(data: bytes, pos: int) -> datetime:
    return datetime.fromtimestamp(_u32(data, pos), tz=timezone.utc)


def _unix(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp()) & 0xFFFFFFFF


def _put(buf: bytearray, pos: int, width: int, data: bytes) -> None:
    data = data[:width]
    buf[pos : pos + len(data)] = data


@dataclass
class BoardHeader:
    """One fixed-size board record; times are UTC."""

    brd_name: str = ""
    title: str = ""
    bm: str = ""
    brdattr: int = 0
    chess_country: str = ""
    vote_limit_posts: int = 0
    vote_limit_logins: int = 0
    b_update: datetime = _EPOCH
    post_limit_posts: int = 0
    post_limit_logins: int = 0
    b_vote: int = 0
    v_time: datetime = _EPOCH
    level: int = 0
    perm_reload: datetime = _EPOCH
    gid: int = 0
    next: list[int] = field(default_factory=lambda: [0, 0])
    first_child: list[int] = field(default_factory=lambda: [0, 0])
    parent: int = 0
    child_count: int = 0
    nuser: int = 0
    post_expire: int = 0
    end_gamble: datetime = _EPOCH
    post_type: str = ""
    post_type_f: str = ""
    fast_recommend_pause: int = 0
    vote_limit_bad_post: int = 0
    post_limit_bad_post: int = 0
    sr_expire: datetime = _EPOCH

    def has_attr(self, flag: BoardAttr | int) -> bool:
        """Whether any bit of ``flag`` is set in ``brdattr``."""
        return self.brdattr & int(flag) != 0

    def bm_list(self) -> list[str]:
        """The board managers, split on ``/``."""
        return self.bm.split("/")

    def class_id(self) -> str:
        """The id of the class this board belongs to."""
        return str(self.gid)

    def is_class(self) -> bool:
        """Whether this record is a group (class) rather than a board."""
        return self.has_attr(BoardAttr.GROUP_BOARD)

    def to_bytes(self) -> bytes:
        """Encode the record into its 256-byte on-disk form."""
        buf = bytearray(BOARD_HEADER_RECORD_LENGTH)
        _put(buf, POS_BOARD_NAME, _NAME_WIDTH, utf8_to_big5(self.brd_name))
        _put(buf, POS_BOARD_TITLE, _TITLE_WIDTH, utf8_to_big5(self.title))
        _put(buf, POS_BM, _BM_WIDTH, self.bm.encode("utf-8"))
        struct.pack_into("<I", buf, POS_BRD_ATTR, self.brdattr & 0xFFFFFFFF)
        buf[POS_VOTE_LIMIT_POSTS] = self.vote_limit_posts & 0xFF
        buf[POS_VOTE_LIMIT_LOGINS] = self.vote_limit_logins & 0xFF
        _put(buf, POS_CHESS_COUNTRY, 1, self.chess_country.encode("utf-8"))
        struct.pack_into("<I", buf, POS_B_UPDATE, _unix(self.b_update))
        buf[POS_POST_LIMIT_POSTS] = self.post_limit_posts & 0xFF
        buf[POS_POST_LIMIT_LOGINS] = self.post_limit_logins & 0xFF
        buf[POS_B_VOTE] = self.b_vote & 0xFF
        struct.pack_into("<I", buf, POS_V_TIME, _unix(self.v_time))
        struct.pack_into("<I", buf, POS_LEVEL, self.level & 0xFFFFFFFF)
        struct.pack_into("<I", buf, POS_PERM_RELOAD, _unix(self.perm_reload))
        struct.pack_into("<I", buf, POS_GID, self.gid & 0xFFFFFFFF)
        if len(self.next) == 2:
            struct.pack_into(
                "<II", buf, POS_NEXT, *(v & 0xFFFFFFFF for v in self.next)
            )
        if len(self.first_child) == 2:
            struct.pack_into(
                "<II", buf, POS_FIRST_CHILD, *(v & 0xFFFFFFFF for v in self.first_child)
            )
        struct.pack_into("<I", buf, POS_PARENT, self.parent & 0xFFFFFFFF)
        struct.pack_into("<I", buf, POS_CHILD_COUNT, self.child_count & 0xFFFFFFFF)
        struct.pack_into("<I", buf, POS_NUSER, self.nuser & 0xFFFFFFFF)
        struct.pack_into("<I", buf, POS_POST_EXPIRE, self.post_expire & 0xFFFFFFFF)
        struct.pack_into("<I", buf, POS_END_GAMBLE, _unix(self.end_gamble))
        _put(buf, POS_POST_TYPE, _POST_TYPE_WIDTH, utf8_to_big5(self.post_type))
        _put(buf, POS_POST_TYPE_F, 1, utf8_to_big5(self.post_type_f))
        buf[POS_FAST_RECOMMEND_PAUSE] = self.fast_recommend_pause & 0xFF
        buf[POS_VOTE_LIMIT_BAD_POST] = self.vote_limit_bad_post & 0xFF
        buf[POS_POST_LIMIT_BAD_POST] = self.post_limit_bad_post & 0xFF
        struct.pack_into("<I", buf, POS_SR_EXPIRE, _unix(self.sr_expire))
        return bytes(buf)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> BoardHeader:
        """Decode a 256-byte on-disk record."""
        data = bytes(data)
        if len(data) < BOARD_HEADER_RECORD_LENGTH:
            raise ValueError(
                f"board record needs {BOARD_HEADER_RECORD_LENGTH} bytes, got {len(data)}"
            )

        def field_bytes(pos: int, width: int) -> bytes:
            return data[pos : pos + width]

        return cls(
            brd_name=big5_to_utf8(cstr_to_bytes(field_bytes(POS_BOARD_NAME, _NAME_WIDTH))),
            title=big5_to_utf8(cstr_to_bytes(field_bytes(POS_BOARD_TITLE, _TITLE_WIDTH))),
            bm=field_bytes(POS_BM, _BM_WIDTH).strip(b"\x00").decode("utf-8", errors="replace"),
            brdattr=_u32(data, POS_BRD_ATTR),
            chess_country=field_bytes(POS_CHESS_COUNTRY, 1)
            .strip(b"\x00")
            .decode("utf-8", errors="replace"),
            vote_limit_posts=data[POS_VOTE_LIMIT_POSTS],
            vote_limit_logins=data[POS_VOTE_LIMIT_LOGINS],
            b_update=_time(data, POS_B_UPDATE),
            post_limit_posts=data[POS_POST_LIMIT_POSTS],
            post_limit_logins=data[POS_POST_LIMIT_LOGINS],
            b_vote=data[POS_B_VOTE],
            v_time=_time(data, POS_V_TIME),
            level=_u32(data, POS_LEVEL),
            perm_reload=_time(data, POS_PERM_RELOAD),
            gid=_i32(data, POS_GID),
            next=[_i32(data, POS_NEXT), _i32(data, POS_NEXT + 4)],
            first_child=[_i32(data, POS_FIRST_CHILD), _i32(data, POS_FIRST_CHILD + 4)],
            parent=_i32(data, POS_PARENT),
            child_count=_i32(data, POS_CHILD_COUNT),
            nuser=_i32(data, POS_NUSER),
            post_expire=_i32(data, POS_POST_EXPIRE),
            end_gamble=_time(data, POS_END_GAMBLE),
            post_type=big5_to_utf8(field_bytes(POS_POST_TYPE, _POST_TYPE_WIDTH).strip(b"\x00")),
            post_type_f=big5_to_utf8(field_bytes(POS_POST_TYPE_F, 1).strip(b"\x00")),
            fast_recommend_pause=data[POS_FAST_RECOMMEND_PAUSE],
            vote_limit_bad_post=data[POS_VOTE_LIMIT_BAD_POST],
            post_limit_bad_post=data[POS_POST_LIMIT_BAD_POST],
            sr_expire=_time(data, POS_SR_EXPIRE),
        )


def open_board_header_file(filename: str | os.PathLike) -> list[BoardHeader]:
    """Read every board record in a ``.BRD`` file.

    A short trailing record is padded with NUL bytes before decoding.
    """
    headers: list[BoardHeader] = []
    with open(filename, "rb") as file:
        while chunk := file.read(BOARD_HEADER_RECORD_LENGTH):
            headers.append(
                BoardHeader.from_bytes(chunk.ljust(BOARD_HEADER_RECORD_LENGTH, b"\x00"))
            )
    return headers


def append_board_header_file_record(
    filename: str | os.PathLike, header: BoardHeader
) -> None:
    """Append ``header`` to a ``.BRD`` file, creating the file if needed."""
    data = header.to_bytes()
    with open(filename, "ab") as file:
        file.write(data)


def remove_board_header_file_record(filename: str | os.PathLike, index: int) -> None:
    """Remove the record at zero-based ``index``, shifting later records down."""
    with open(filename, "r+b") as file:
        size = os.fstat(file.fileno()).st_size
        if index < 0 or index * BOARD_HEADER_RECORD_LENGTH >= size:
            raise IndexError(f"board record index {index} out of range")
        file.seek((index + 1) * BOARD_HEADER_RECORD_LENGTH)
        rest = file.read()
        file.seek(index * BOARD_HEADER_RECORD_LENGTH)
        file.write(rest)
        file.truncate()