"""Helpers for fixed-length, NUL-terminated byte fields."""

from __future__ import annotations


def cstr_to_bytes(cstr: bytes | bytearray | memoryview) -> bytes:
    """Return the bytes of ``cstr`` up to, not including, the first NUL byte."""
    data = bytes(cstr)
    end = data.find(b"\x00")
    return data if end == -1 else data[:end]


def cstr_to_string(cstr: bytes | bytearray | memoryview) -> str:
    """Return the text of ``cstr`` up to the first NUL byte, decoded as UTF-8."""
    return cstr_to_bytes(cstr).decode("utf-8", errors="replace")