# bbskit

Tools for working with the data files of bulletin board systems in the
PTT family (and FormosaBBS): board headers, article indexes, login
records, password hashes and the memory-mapped cache used by a running
board.

Everything is plain Python with no third-party dependencies.

## What is inside

| Module | Purpose |
| --- | --- |
| `bbskit.cstr` | Cut fixed-width, NUL-padded byte fields down to their content. |
| `bbskit.big5` | Convert between text and the Big5 bytes stored on disk. |
| `bbskit.crypt.tables` | Constant tables of the DES-based password hash. |
| `bbskit.crypt.fcrypt` | The DES-based `crypt(3)` used for stored passwords. |
| `bbskit.cache.mapped` | Memory-mapped files that back a shared cache. |
| `bbskit.cache.connect` | Open a cache from a connection string. |
| `bbskit.pttbbs.board` | Read, append and remove `.BRD` board header records. |
| `bbskit.pttbbs.bad_logins` | Parse and format `logins.bad` lines. |
| `bbskit.pttbbs.cache` | Read user data out of the board's shared cache. |
| `bbskit.formosabbs.file` | Read FormosaBBS `.DIR` article indexes. |
| `bbskit.db` | A driver registry and a database facade over a board home. |

## Examples

Fixed-width C strings:

```python
from bbskit.cstr import cstr_to_bytes, cstr_to_string

cstr_to_string(b"SYSOP\x00\x00\x00")   # "SYSOP"
cstr_to_bytes(b"01234\x006789")        # b"01234"
```

Big5 text (the HKSCS variant, which carries the kana used on Taiwanese
boards). Encoding stops at the first character with no Big5 form;
decoding replaces bad bytes with U+FFFD.

```python
from bbskit.big5 import big5_to_utf8, utf8_to_big5

raw = utf8_to_big5("新的目錄")
assert big5_to_utf8(raw) == "新的目錄"
```

Checking a password against a stored hash: the hash serves as the salt,
and a match reproduces its first 13 bytes (the result is 14 bytes, the
last one NUL). Only the first eight bytes of the key count. A salt shorter
than two bytes, or with a byte outside ASCII, raises `InvalidCryptError`.

```python
from bbskit.crypt.fcrypt import fcrypt

def password_matches(password: bytes, stored_hash: bytes) -> bool:
    return fcrypt(password, stored_hash)[:13] == stored_hash[:13]
```

Board headers. `BoardHeader` is a dataclass with `from_bytes` and
`to_bytes` for the 256-byte record; flags are tested with `has_attr` and
the `BoardAttr` flag enum.

```python
from bbskit.pttbbs.board import (
    BoardAttr,
    BoardHeader,
    append_board_header_file_record,
    open_board_header_file,
    remove_board_header_file_record,
)

for board in open_board_header_file("/home/bbs/.BRD"):
    print(board.brd_name, board.class_id(), board.bm_list(), board.is_class())
    print(board.has_attr(BoardAttr.HIDE))

append_board_header_file_record("boards.BRD", BoardHeader(brd_name="Test"))
remove_board_header_file_record("boards.BRD", 0)   # IndexError if out of range
```

Login records, from either the board home or a user's directory. A line
that cannot be parsed raises `InvalidLoginsBadFormatError`.

```python
from bbskit.pttbbs.bad_logins import LoginAttempt, open_bad_login_file

attempt = LoginAttempt.parse(" SYSOP       [01/01/2021 10:08:56 Fri] ?@172.22.0.1")
assert attempt.is_under_bbs_home()
assert attempt.format() == " SYSOP       [01/01/2021 10:08:56 Fri] ?@172.22.0.1"

attempts = open_bad_login_file("/home/bbs/logins.bad")
```

FormosaBBS article indexes (248-byte records; filename, owner, title,
modification time and post number are read):

```python
from bbskit.formosabbs.file import open_formosa_file_header_file

headers = open_formosa_file_header_file("boards/test/.DIR")
```

Memory-mapped caches, opened directly or through a connection string
(`file:<path>`, or a bare path). A `MappedFile` exposes the mapping as
`buf` and works as a context manager.

```python
from bbskit.cache.connect import new_cache
from bbskit.cache.mapped import create_mmap, open_mmap, remove_mmap

with create_mmap("bbs.shm", 20) as mapped:
    mapped.buf[0] = 42

cache = new_cache("file:bbs.shm")
assert cache.buf[0] == 42
cache.close()
remove_mmap("bbs.shm")
```

The shared cache of a running board is read through `SharedCache`:

```python
from bbskit.pttbbs.cache import MemoryMappingSetting, SharedCache

settings = MemoryMappingSetting(alignment_bytes=2, max_users=50, id_len=12)
with SharedCache.open("file:/tmp/bbs.shm", settings) as cache:
    print(cache.version(), cache.user_id(0), cache.money(0))
```

Field positions are worked out from the `MemoryMappingSetting`, which must
match how the board was built. `user_id` and `money` raise `IndexError`
for a uid outside `max_users`; `user_info(uid)` returns
`user_info_length` raw bytes.

## A database over a board home

`bbskit.db` holds a registry of drivers. A driver subclasses the abstract
`Connector`, is registered under a name with `register`, and `open_db`
opens it against a data source, returning a `DB` with
`read_user_records()`, `read_user_favorite_records(user_id)`,
`read_board_records()`, `read_board_article_records(board_id)`,
`read_board_treasure_records(board_id, treasure_id)`,
`read_board_article_file(board_id, filename)`,
`read_board_treasure_file(board_id, treasure_id, filename)`,
`new_board_record(args)`, `add_board_record(record)` and
`get_user_article_records(user_id)`.

`open_db` raises `BBSError` when the driver is unknown or fails to open,
and `new_board_record` / `add_board_record` raise it when the driver lacks
board writing; other errors from a driver propagate unchanged.
`read_board_article_records` returns an empty list when the board's index
file is missing. `get_user_article_records` uses a driver's cached list
when it offers one that is not empty, and otherwise scans every board
except `ALLPOST`, returning `UserArticleRecord` items.

## What it does not do

- No `Connector` implementation is included: to use `bbskit.db` you supply
  your own driver over the modules above.
- There is no command-line tool.
- System V shared memory is not supported: `new_cache("shmkey:<key>")`
  raises `CacheError`; only memory-mapped files can back a cache.
- Only the leading fields of the shared cache (version, user ids, money,
  online-user records) are located; the rest of its layout is not read.