"""Conversion between Unicode text and the Big5 encoding used by BBS systems.

The HKSCS variant of Big5 is used because it carries the ETEN extensions,
such as Japanese kana, that Taiwanese BBS systems rely on.
"""

from __future__ import annotations

_CODEC = "big5hkscs"


def utf8_to_big5(text: str) -> bytes:
    """Encode ``text`` as Big5.

    Encoding stops at the first character that has no Big5 form; the bytes
    produced up to that point are returned.
    """
    try:
        return text.encode(_CODEC)
    except UnicodeEncodeError as exc:
        return text[: exc.start].encode(_CODEC)


def big5_to_utf8(data: bytes | bytearray) -> str:
    """Decode Big5 ``data`` into text, replacing undecodable bytes with U+FFFD."""
    return bytes(data).decode(_CODEC, errors="replace")