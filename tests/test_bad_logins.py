from datetime import datetime, timezone

import pytest

from bbskit.pttbbs.bad_logins import (
    InvalidLoginsBadFormatError,
    LoginAttempt,
    open_bad_login_file,
)

HOME_ENTRIES = [
    (True, "SYSOP", (10, 8, 56)),
    (True, "SYSOP", (10, 10, 50)),
    (True, "abc123456789", (10, 11, 9)),
    (True, "test01", (10, 11, 23)),
    (True, "test02", (10, 11, 35)),
    (True, "test03", (10, 11, 45)),
    (True, "test04", (10, 13, 35)),
    (True, "test05", (10, 13, 45)),
    (True, "SYSOP", (10, 13, 53)),
    (True, "test06", (10, 14, 38)),
    (True, "SYSOP", (10, 14, 46)),
    (False, "test01", (10, 15, 16)),
    (False, "test02", (10, 15, 19)),
    (False, "test03", (10, 15, 22)),
    (True, "test04", (10, 15, 38)),
]


def _home_line(success, user_id, hms):
    mark = " " if success else "-"
    stamp = "%02d:%02d:%02d" % hms
    return f"{mark}{user_id:<12}[01/01/2021 {stamp} Fri] ?@172.22.0.1"


def _check_invariants(attempt):
    assert attempt.from_host != ""
    assert attempt.login_start_time.year > 1
    assert not (attempt.user_id == "" and attempt.success)


def test_open_home_file(tmp_path):
    path = tmp_path / "logins.bad"
    path.write_text("\n".join(_home_line(*e) for e in HOME_ENTRIES) + "\n")

    actual = open_bad_login_file(path)

    assert len(actual) == len(HOME_ENTRIES)
    for attempt, (success, user_id, (h, m, s)) in zip(actual, HOME_ENTRIES):
        _check_invariants(attempt)
        assert attempt.success is success
        assert attempt.user_id == user_id
        assert attempt.login_start_time == datetime(2021, 1, 1, h, m, s, tzinfo=timezone.utc)
        assert attempt.from_host == "172.22.0.1"


def test_open_user_file(tmp_path):
    path = tmp_path / "logins.bad"
    path.write_text("[01/01/2021 10:15:16 Fri] 172.22.0.1\n")

    actual = open_bad_login_file(path)

    assert len(actual) == 1
    attempt = actual[0]
    _check_invariants(attempt)
    assert attempt.success is False
    assert attempt.user_id == ""
    assert attempt.login_start_time == datetime(2021, 1, 1, 10, 15, 16, tzinfo=timezone.utc)
    assert attempt.from_host == "172.22.0.1"


@pytest.mark.parametrize(
    "line",
    [
        " SYSOP       [01/01/2021 10:08:56 Fri] ?@172.22.0.1",
        "-test03      [01/12/2021 13:14:15 Tue] ?@1.2.3.4",
        " test03      [12/30/2021 21:55:59 Thu] ?@255.255.255.255",
        " abc123456789[01/01/2021 10:11:09 Fri] ?@127.0.0.1",
        "-abc123456789[01/01/2021 10:11:09 Fri] ?@192.168.1.1",
        "[01/01/2021 01:02:03 Fri] 1.2.3.4",
        "[01/12/2021 13:14:15 Tue] 255.255.255.255",
        "[12/30/2021 21:55:59 Thu] 100.100.100.100",
    ],
)
def test_round_trip(line):
    assert LoginAttempt.parse(line).format() == line


def test_parse_accepts_bytes():
    attempt = LoginAttempt.parse(b"-test03      [01/12/2021 13:14:15 Tue] ?@1.2.3.4")
    assert attempt.success is False
    assert attempt.user_id == "test03"
    assert attempt.from_host == "1.2.3.4"


def test_is_under_bbs_home():
    home = LoginAttempt.parse(" SYSOP       [01/01/2021 10:08:56 Fri] ?@172.22.0.1")
    user = LoginAttempt.parse("[01/01/2021 01:02:03 Fri] 1.2.3.4")
    assert home.is_under_bbs_home() is True
    assert user.is_under_bbs_home() is False


@pytest.mark.parametrize(
    "line",
    [
        "xSYSOP       [01/01/2021 10:08:56 Fri] ?@172.22.0.1",
        "",
        "[01/01/2021 10:08:56 Foo] 1.2.3.4",
        "[13/01/2021 10:08:56 Fri] 1.2.3.4",
        " SYSOP",
    ],
)
def test_invalid_lines(line):
    with pytest.raises(InvalidLoginsBadFormatError):
        LoginAttempt.parse(line)


def test_open_file_with_bad_line(tmp_path):
    path = tmp_path / "logins.bad"
    path.write_text("[01/01/2021 01:02:03 Fri] 1.2.3.4\n*bogus\n")
    with pytest.raises(InvalidLoginsBadFormatError):
        open_bad_login_file(path)