"""Constant tables for the DES-based crypt(3) password hash."""

PASSLEN = 14

DES_ITERATIONS = 16

# Combined S-box and P-permutation lookup, one block of 64 words per S-box.
_SP_TRANS_HEX = (
    """
    00820200 00020000 80800000 80820200 00800000 80020200 80020000 80800000
    80020200 00820200 00820000 80000200 80800200 00800000 00000000 80020000
    00020000 80000000 00800200 00020200 80820200 00820000 80000200 00800200
    80000000 00000200 00020200 80820000 00000200 80800200 80820000 00000000
    00000000 80820200 00800200 80020000 00820200 00020000 80000200 00800200
    80820000 00000200 00020200 80800000 80020200 80000000 80800000 00820000
    80820200 00020200 00820000 80800200 00800000 80000200 80020000 00000000
    00020000 00800000 80800200 00820200 80000000 80820000 00000200 80020200
    """,
    """
    10042004 00000000 00042000 10040000 10000004 00002004 10002000 00042000
    00002000 10040004 00000004 10002000 00040004 10042000 10040000 00000004
    00040000 10002004 10040004 00002000 00042004 10000000 00000000 00040004
    10002004 00042004 10042000 10000004 10000000 00040000 00002004 10042004
    00040004 10042000 10002000 00042004 10042004 00040004 10000004 00000000
    10000000 00002004 00040000 10040004 00002000 10000000 00042004 10002004
    10042000 00002000 00000000 10000004 00000004 10042004 00042000 10040000
    10040004 00040000 00002004 10002000 10002004 00000004 10040000 00042000
    """,
    """
    41000000 01010040 00000040 41000040 40010000 01000000 41000040 00010040
    01000040 00010000 01010000 40000000 41010040 40000040 40000000 41010000
    00000000 40010000 01010040 00000040 40000040 41010040 00010000 41000000
    41010000 01000040 40010040 01010000 00010040 00000000 01000000 40010040
    01010040 00000040 40000000 00010000 40000040 40010000 01010000 41000040
    00000000 01010040 00010040 41010000 40010000 01000000 41010040 40000000
    40010040 41000000 01000000 41010040 00010000 01000040 41000040 00010040
    01000040 00000000 41010000 40000040 41000000 40010040 00000040 01010000
    """,
    """
    00100402 04000400 00000002 04100402 00000000 04100000 04000402 00100002
    04100400 04000002 04000000 00000402 04000002 00100402 00100000 04000000
    04100002 00100400 00000400 00000002 00100400 04000402 04100000 00000400
    00000402 00000000 00100002 04100400 04000400 04100002 04100402 00100000
    04100002 00000402 00100000 04000002 00100400 04000400 00000002 04100000
    04000402 00000000 00000400 00100002 00000000 04100002 04100400 00000400
    04000000 04100402 00100402 00100000 04100402 00000002 04000400 00100402
    00100002 00100400 04100000 04000402 00000402 04000000 04000002 04100400
    """,
    """
    02000000 00004000 00000100 02004108 02004008 02000100 00004108 02004000
    00004000 00000008 02000008 00004100 02000108 02004008 02004100 00000000
    00004100 02000000 00004008 00000108 02000100 00004108 00000000 02000008
    00000008 02000108 02004108 00004008 02004000 00000100 00000108 02004100
    02004100 02000108 00004008 02004000 00004000 00000008 02000008 02000100
    02000000 00004100 02004108 00000000 00004108 02000000 00000100 00004008
    02000108 00000100 00000000 02004108 02004008 02004100 00000108 00004000
    00004100 02004008 02000100 00000108 00000008 00004108 02004000 02000008
    """,
    """
    20000010 00080010 00000000 20080800 00080010 00000800 20000810 00080000
    00000810 20080810 00080800 20000000 20000800 20000010 20080000 00080810
    00080000 20000810 20080010 00000000 00000800 00000010 20080800 20080010
    20080810 20080000 20000000 00000810 00000010 00080800 00080810 20000800
    00000810 20000000 20000800 00080810 20080800 00080010 00000000 20000800
    20000000 00000800 20080010 00080000 00080010 20080810 00080800 00000010
    20080810 00080800 00080000 20000810 20000010 20080000 00080810 00000000
    00000800 20000010 20000810 20080800 20080000 00000810 00000010 20080010
    """,
    """
    00001000 00000080 00400080 00400001 00401081 00001001 00001080 00000000
    00400000 00400081 00000081 00401000 00000001 00401080 00401000 00000081
    00400081 00001000 00001001 00401081 00000000 00400080 00400001 00001080
    00401001 00001081 00401080 00000001 00001081 00401001 00000080 00400000
    00001081 00401000 00401001 00000081 00001000 00000080 00400000 00401001
    00400081 00001081 00001080 00000000 00000080 00400001 00000001 00400080
    00000000 00400081 00400080 00001080 00000081 00001000 00401081 00400000
    00401080 00000001 00001001 00401081 00400001 00401080 00401000 00001001
    """,
    """
    08200020 08208000 00008020 00000000 08008000 00200020 08200000 08208020
    00000020 08000000 00208000 00008020 00208020 08008020 08000020 08200000
    00008000 00208020 00200020 08008000 08208020 08000020 00000000 00208000
    08000000 00200000 08008020 08200020 00200000 00008000 08208000 00000020
    00200000 00008000 08000020 08208020 00008020 08000000 00000000 00208000
    08200020 08008020 08008000 00200020 08208000 00000020 00200020 08008000
    08208020 00200000 08200000 08000020 00208000 00008020 08008020 08200000
    00000020 08208000 00208020 00000000 08000000 08200020 00008000 00208020
    """,
)

SP_TRANS = tuple(
    tuple(int(word, 16) for word in block.split()) for block in _SP_TRANS_HEX
)

# Key-schedule tables are pure bit permutations: each of the six index bits
# contributes a fixed set of output bits, so a table is the OR of its bases.
_SKB_BASES = (
    (0x00000010, 0x20000000, 0x00010000, 0x00000800, 0x00000020, 0x00080000),
    (0x02000000, 0x00002000, 0x00200000, 0x00000004, 0x00000400, 0x10000000),
    (0x00000001, 0x00040000, 0x01000000, 0x00000002, 0x00000200, 0x08000000),
    (0x00100000, 0x00000100, 0x00000008, 0x00001000, 0x04000000, 0x00020000),
    (0x10000000, 0x00010000, 0x00000004, 0x20000000, 0x00100000, 0x00001000),
    (0x08000000, 0x00000008, 0x00000400, 0x00020000, 0x00000001, 0x02000000),
    (0x00000100, 0x00080000, 0x01000000, 0x00000010, 0x00200000, 0x00000200),
    (0x04000000, 0x00040000, 0x00000002, 0x00002000, 0x00000020, 0x00000800),
)


def _expand_bases(bases):
    table = []
    for index in range(64):
        value = 0
        for bit, contribution in enumerate(bases):
            if index >> bit & 1:
                value |= contribution
        table.append(value)
    return tuple(table)


SKB = tuple(_expand_bases(bases) for bases in _SKB_BASES)

# Rotation amount per DES round: True means rotate by two, False by one.
SHIFTS2 = tuple(
    shift == 2 for shift in (1, 1, 2, 2, 2, 2, 2, 2, 1, 2, 2, 2, 2, 2, 2, 1)
)


def _salt_value(code):
    if 0x2E <= code <= 0x39:
        return code - 0x2E
    if 0x3A <= code <= 0x5A:
        return code - 0x35
    if 0x5B <= code <= 0x7A:
        return code - 0x3B
    return 0


CON_SALT = tuple(_salt_value(code) for code in range(128))

COV2CHAR = tuple(
    b"./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
)