import pytest

from bbskit.cstr import cstr_to_bytes, cstr_to_string


def _fixed(size, content=b""):
    buf = bytearray(size)
    buf[: len(content)] = content
    return bytes(buf)


CASES = [
    pytest.param(_fixed(13), b"", id="init"),
    pytest.param(_fixed(13, b"123"), b"123", id="with only 3 letters"),
    pytest.param(_fixed(10, b"0123456789"), b"0123456789", id="with no 0"),
    pytest.param(_fixed(10, b"01234\x006789"), b"01234", id="cutoff at str4[5]"),
]


@pytest.mark.parametrize("raw, expected", CASES)
def test_cstr_to_bytes(raw, expected):
    assert cstr_to_bytes(raw) == expected


@pytest.mark.parametrize("raw, expected", CASES)
def test_cstr_to_string(raw, expected):
    assert cstr_to_string(raw) == expected.decode()


def test_cstr_to_bytes_accepts_bytearray():
    assert cstr_to_bytes(bytearray(b"ab\x00cd")) == b"ab"


def test_cstr_to_bytes_leading_nul():
    assert cstr_to_bytes(b"\x00abc") == b""