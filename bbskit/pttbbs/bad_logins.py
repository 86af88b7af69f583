"""Records of login attempts kept in ``logins.bad`` files.

Two layouts exist. The file under the BBS home directory lists every
attempt, successful or not, for every user::

     SYSOP       [01/01/2021 10:13:53 Fri] ?@172.22.0.1
    -test01      [01/01/2021 10:15:16 Fri] ?@172.22.0.1

A leading ``-`` marks a failure. The file in a user's home directory lists
only that user's failed attempts and carries no user id::

    [01/01/2021 10:15:16 Fri] 172.22.0.1

Both are read into :class:`LoginAttempt`; entries from a user's file have an
empty ``user_id`` that the caller fills in if needed.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import datetime, timezone

USER_ID_LENGTH = 12
FROM_HOST_PREFIX = "?@"

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_TIME_LENGTH = len("[01/02/2006 15:04:05 Mon]")
_TIME_RE = re.compile(
    r"\[(\d{2})/(\d{2})/(\d{4}) (\d{2}):(\d{2}):(\d{2}) (?:%s)\]" % "|".join(_WEEKDAYS)
)


class InvalidLoginsBadFormatError(ValueError):
    """Raised when a line of a ``logins.bad`` file cannot be parsed."""


def _parse_time(text: str) -> datetime:
    match = _TIME_RE.fullmatch(text)
    if match is None:
        raise InvalidLoginsBadFormatError(f"invalid login time: {text!r}")
    month, day, year, hour, minute, second = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError as exc:
        raise InvalidLoginsBadFormatError(f"invalid login time: {text!r}") from exc


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.strftime("[%m/%d/%Y %H:%M:%S ") + _WEEKDAYS[value.weekday()] + "]"


@dataclass
class LoginAttempt:
    """One successful or failed login; times are UTC."""

    success: bool
    user_id: str
    login_start_time: datetime
    from_host: str

    @classmethod
    def parse(cls, text: str | bytes) -> LoginAttempt:
        """Parse one line of either ``logins.bad`` layout."""
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8", errors="replace")
        if not text:
            raise InvalidLoginsBadFormatError("empty logins.bad line")

        lead = text[0]
        if lead in (" ", "-"):
            success = lead == " "
            user_id = text[1 : 1 + USER_ID_LENGTH].strip()
            index = 1 + USER_ID_LENGTH
        elif lead == "[":
            success = False
            user_id = ""
            index = 0
        else:
            raise InvalidLoginsBadFormatError(f"invalid logins.bad line: {text!r}")

        login_start_time = _parse_time(text[index : index + _TIME_LENGTH])
        index += _TIME_LENGTH
        from_host = text[index + 1 :].lstrip(FROM_HOST_PREFIX)
        return cls(success, user_id, login_start_time, from_host)

    def format(self) -> str:
        """Render the attempt as a line in the layout it was read from."""
        parts: list[str] = []
        under_home = self.is_under_bbs_home()
        if under_home:
            parts.append(" " if self.success else "-")
            parts.append(self.user_id.ljust(USER_ID_LENGTH))
        parts.append(_format_time(self.login_start_time))
        parts.append(" ")
        if under_home:
            parts.append(FROM_HOST_PREFIX)
        parts.append(self.from_host)
        return "".join(parts)

    def is_under_bbs_home(self) -> bool:
        """Whether the attempt comes from the BBS-home file, which names users."""
        return len(self.user_id) > 1


def open_bad_login_file(filename: str | os.PathLike) -> list[LoginAttempt]:
    """Read every attempt in a ``logins.bad`` file, in file order."""
    attempts: list[LoginAttempt] = []
    with open(filename, encoding="utf-8", errors="replace") as file:
        for line in file:
            attempts.append(LoginAttempt.parse(line.rstrip("\n")))
    return attempts