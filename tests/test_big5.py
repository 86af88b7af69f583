import pytest

from bbskit.big5 import big5_to_utf8, utf8_to_big5

PAIRS = [
    pytest.param("新的目錄", b"\xb7\x73\xaa\xba\xa5\xd8\xbf\xfd", id="test0"),
    pytest.param(
        "ピリカピリララ",
        b"\xc7\xd0\xc7\xe6\xc7\xa7\xc7\xd0\xc7\xe6\xc7\xe5\xc7\xe5",
        id="test1",
    ),
]


@pytest.mark.parametrize("text, encoded", PAIRS)
def test_utf8_to_big5(text, encoded):
    assert utf8_to_big5(text) == encoded


@pytest.mark.parametrize("text, encoded", PAIRS)
def test_big5_to_utf8(text, encoded):
    assert big5_to_utf8(encoded) == text


def test_ascii_passes_through():
    assert utf8_to_big5("SYSOP") == b"SYSOP"
    assert big5_to_utf8(b"SYSOP") == "SYSOP"


def test_round_trip():
    text = "站長好! junk"
    assert big5_to_utf8(utf8_to_big5(text)) == text


def test_big5_to_utf8_accepts_bytearray():
    assert big5_to_utf8(bytearray(b"\xb7\x73")) == "新"