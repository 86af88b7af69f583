"""DES-based crypt(3) password hashing as used by BBS password files."""

from __future__ import annotations

import struct

from .tables import (
    CON_SALT,
    COV2CHAR,
    DES_ITERATIONS,
    PASSLEN,
    SHIFTS2,
    SKB,
    SP_TRANS,
)

_M32 = 0xFFFFFFFF


class InvalidCryptError(ValueError):
    """Raised when a salt cannot be used for hashing."""


def _perm_op(a: int, b: int, n: int, m: int) -> tuple[int, int]:
    t = ((a >> n) ^ b) & m
    b ^= t
    a = (a ^ (t << n)) & _M32
    return a, b


def _h_perm_op(a: int, n: int, m: int) -> int:
    t = (((a << (16 - n)) & _M32) ^ a) & m
    return a ^ t ^ (t >> (16 - n))


def _des_set_key(key: bytes) -> list[int]:
    c, d = struct.unpack("<II", key)

    d, c = _perm_op(d, c, 4, 0x0F0F0F0F)
    c = _h_perm_op(c, -2, 0xCCCC0000)
    d = _h_perm_op(d, -2, 0xCCCC0000)
    d, c = _perm_op(d, c, 1, 0x55555555)
    c, d = _perm_op(c, d, 8, 0x00FF00FF)
    d, c = _perm_op(d, c, 1, 0x55555555)

    d = (
        ((d & 0x000000FF) << 16)
        | (d & 0x0000FF00)
        | ((d & 0x00FF0000) >> 16)
        | ((c & 0xF0000000) >> 4)
    )
    c &= 0x0FFFFFFF

    schedule: list[int] = []
    for double_shift in SHIFTS2:
        if double_shift:
            c = ((c >> 2) | (c << 26)) & 0x0FFFFFFF
            d = ((d >> 2) | (d << 26)) & 0x0FFFFFFF
        else:
            c = ((c >> 1) | (c << 27)) & 0x0FFFFFFF
            d = ((d >> 1) | (d << 27)) & 0x0FFFFFFF

        s = (
            SKB[0][c & 0x3F]
            | SKB[1][((c >> 6) & 0x03) | ((c >> 7) & 0x3C)]
            | SKB[2][((c >> 13) & 0x0F) | ((c >> 14) & 0x30)]
            | SKB[3][((c >> 20) & 0x01) | ((c >> 21) & 0x06) | ((c >> 22) & 0x38)]
        )
        t = (
            SKB[4][d & 0x3F]
            | SKB[5][((d >> 7) & 0x03) | ((d >> 8) & 0x3C)]
            | SKB[6][(d >> 15) & 0x3F]
            | SKB[7][((d >> 21) & 0x0F) | ((d >> 22) & 0x30)]
        )

        schedule.append(((t << 16) | (s & 0x0000FFFF)) & _M32)
        s = (s >> 16) | (t & 0xFFFF0000)
        schedule.append(((s << 4) | (s >> 28)) & _M32)
    return schedule


def _round(right: int, index: int, e0: int, e1: int, schedule: list[int]) -> int:
    """Return the value to XOR into the left half for one DES round."""
    t = right ^ (right >> 16)
    u = t & e0
    t &= e1
    u = ((u ^ (u << 16)) ^ right ^ schedule[index]) & _M32
    t = ((t ^ (t << 16)) ^ right ^ schedule[index + 1]) & _M32
    t = ((t >> 4) | (t << 28)) & _M32
    return (
        SP_TRANS[1][t & 0x3F]
        | SP_TRANS[3][(t >> 8) & 0x3F]
        | SP_TRANS[5][(t >> 16) & 0x3F]
        | SP_TRANS[7][(t >> 24) & 0x3F]
        | SP_TRANS[0][u & 0x3F]
        | SP_TRANS[2][(u >> 8) & 0x3F]
        | SP_TRANS[4][(u >> 16) & 0x3F]
        | SP_TRANS[6][(u >> 24) & 0x3F]
    )


def _body(schedule: list[int], e0: int, e1: int) -> tuple[int, int]:
    left = right = 0
    for _ in range(25):
        for index in range(0, DES_ITERATIONS * 2, 4):
            left ^= _round(right, index, e0, e1, schedule)
            right ^= _round(left, index + 2, e0, e1, schedule)
        left, right = right, left

    left, right = (
        ((right >> 1) | (right << 31)) & _M32,
        ((left >> 1) | (left << 31)) & _M32,
    )

    right, left = _perm_op(right, left, 1, 0x55555555)
    left, right = _perm_op(left, right, 8, 0x00FF00FF)
    right, left = _perm_op(right, left, 2, 0x33333333)
    left, right = _perm_op(left, right, 16, 0x0000FFFF)
    right, left = _perm_op(right, left, 4, 0x0F0F0F0F)
    return left, right


def _salt_char(salt: bytes, position: int) -> int:
    if len(salt) <= position:
        raise InvalidCryptError("salt must hold at least two bytes")
    char = salt[position] or ord("A")
    if char >= len(CON_SALT):
        raise InvalidCryptError(f"salt byte {char:#x} is outside the ASCII range")
    return char


def fcrypt(key: bytes | str, salt: bytes | str) -> bytes:
    """Hash ``key`` with ``salt`` and return the 14-byte NUL-terminated result.

    Only the first eight bytes of the key and the first two bytes of the salt
    matter, so passing a stored hash as the salt reproduces that hash when
    the key is correct.
    """
    if isinstance(key, str):
        key = key.encode("latin-1")
    if isinstance(salt, str):
        salt = salt.encode("latin-1")

    first = _salt_char(salt, 0)
    second = _salt_char(salt, 1)
    eswap0 = CON_SALT[first]
    eswap1 = CON_SALT[second] << 4

    key_block = bytearray(8)
    for index, byte in enumerate(key[:8]):
        if byte == 0:
            break
        key_block[index] = (byte << 1) & 0xFF

    schedule = _des_set_key(bytes(key_block))
    left, right = _body(schedule, eswap0, eswap1)

    bits = int.from_bytes(struct.pack("<II", left, right) + b"\x00", "big")
    total_bits = 72
    chars = bytes(
        COV2CHAR[(bits >> (total_bits - 6 * (n + 1))) & 0x3F]
        for n in range(PASSLEN - 3)
    )
    return bytes((first, second)) + chars + b"\x00"