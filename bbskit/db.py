"""Driver-independent access to a BBS data directory.

A driver implements :class:`Connector` and is made available with
:func:`register`. :func:`open_db` then opens it by name.

Records returned by a connector are duck-typed. Board records carry a
``board_id`` attribute. Article records carry ``filename``, ``title`` and
``owner`` attributes.

A connector can also offer two optional capabilities:

* board writing: ``new_board_record(args)`` and
  ``add_board_record_file_record(name, record)``;
* cached user articles: ``get_user_article_records_path(user_id)`` and
  ``read_user_article_record_file(name)``.
"""

from __future__ import annotations

import abc
import enum
import logging
import threading
from dataclasses import dataclass
from typing import Any, Sequence

logger = logging.getLogger(__name__)

_SKIPPED_BOARDS = frozenset({"ALLPOST"})


class BBSError(Exception):
    """Raised when a driver cannot be found, opened or used as asked."""


class FavoriteType(enum.IntEnum):
    """Kind of an entry in a user's favourite list."""

    BOARD = 0
    FOLDER = 1
    LINE = 2


class Connector(abc.ABC):
    """What a BBS driver must provide: file locations and record readers."""

    @abc.abstractmethod
    def open(self, data_source_name: str) -> None:
        """Apply driver settings such as the BBS home directory."""

    @abc.abstractmethod
    def get_user_records_path(self) -> str:
        """Path of the user records file."""

    @abc.abstractmethod
    def read_user_records_file(self, name: str) -> list[Any]:
        """User records stored in ``name``."""

    @abc.abstractmethod
    def get_user_favorite_records_path(self, user_id: str) -> str:
        """Path of the favourite list of ``user_id``."""

    @abc.abstractmethod
    def read_user_favorite_records_file(self, name: str) -> list[Any]:
        """Favourite records stored in ``name``."""

    @abc.abstractmethod
    def get_board_records_path(self) -> str:
        """Path of the board headers file."""

    @abc.abstractmethod
    def read_board_records_file(self, name: str) -> list[Any]:
        """Board records stored in ``name``."""

    @abc.abstractmethod
    def get_board_article_records_path(self, board_id: str) -> str:
        """Path of the article index of a board."""

    @abc.abstractmethod
    def get_board_treasure_records_path(
        self, board_id: str, treasure_id: Sequence[str]
    ) -> str:
        """Path of the index of a treasure (digest) folder of a board."""

    @abc.abstractmethod
    def read_article_records_file(self, name: str) -> list[Any]:
        """Article records stored in ``name``."""

    @abc.abstractmethod
    def get_board_article_file_path(self, board_id: str, filename: str) -> str:
        """Path of one article of a board."""

    @abc.abstractmethod
    def get_board_treasure_file_path(
        self, board_id: str, treasure_id: Sequence[str], name: str
    ) -> str:
        """Path of one file inside a treasure folder of a board."""

    @abc.abstractmethod
    def read_board_article_file(self, name: str) -> bytes:
        """Raw content of the file ``name``."""


@dataclass(frozen=True)
class UserArticleRecord:
    """An article posted by a user, located by board and article id."""

    board_id: str
    title: str
    owner: str
    article_id: str


_drivers: dict[str, Connector] = {}
_drivers_lock = threading.Lock()


def register(driver_name: str, connector: Connector) -> None:
    """Make ``connector`` available to :func:`open_db` as ``driver_name``."""
    with _drivers_lock:
        _drivers[driver_name] = connector


def open_db(driver_name: str, data_source_name: str) -> DB:
    """Open the registered driver ``driver_name`` on ``data_source_name``."""
    with _drivers_lock:
        connector = _drivers.get(driver_name)
    if connector is None:
        raise BBSError(f"bbs: drivername: {driver_name} not found")
    try:
        connector.open(data_source_name)
    except Exception as exc:
        raise BBSError(f"bbs: drivername: {driver_name} open error: {exc}") from exc
    return DB(connector)


def _is_missing_file(exc: Exception) -> bool:
    return isinstance(exc, FileNotFoundError) or "no such file or directory" in str(
        exc
    ).lower()


class DB:
    """A whole BBS data store reached through one connector."""

    def __init__(self, connector: Connector) -> None:
        self.connector = connector

    def _capability(self, name: str):
        method = getattr(self.connector, name, None)
        if not callable(method):
            raise BBSError(f"bbs: driver does not support {name}")
        return method

    def read_user_records(self) -> list[Any]:
        """All user records."""
        path = self.connector.get_user_records_path()
        logger.debug("path: %s", path)
        return self.connector.read_user_records_file(path)

    def read_user_favorite_records(self, user_id: str) -> list[Any]:
        """The favourite list of ``user_id``."""
        path = self.connector.get_user_favorite_records_path(user_id)
        logger.debug("path: %s", path)
        return self.connector.read_user_favorite_records_file(path)

    def read_board_records(self) -> list[Any]:
        """All board records."""
        path = self.connector.get_board_records_path()
        logger.debug("path: %s", path)
        return self.connector.read_board_records_file(path)

    def read_board_article_records(self, board_id: str) -> list[Any]:
        """Article records of a board; a board without an index has none."""
        path = self.connector.get_board_article_records_path(board_id)
        logger.debug("path: %s", path)
        try:
            return self.connector.read_article_records_file(path)
        except Exception as exc:
            if _is_missing_file(exc):
                return []
            raise

    def read_board_treasure_records(
        self, board_id: str, treasure_id: Sequence[str]
    ) -> list[Any]:
        """Records of a treasure folder of a board."""
        path = self.connector.get_board_treasure_records_path(board_id, treasure_id)
        logger.debug("path: %s", path)
        return self.connector.read_article_records_file(path)

    def read_board_article_file(self, board_id: str, filename: str) -> bytes:
        """Raw content of an article of a board."""
        path = self.connector.get_board_article_file_path(board_id, filename)
        logger.debug("path: %s", path)
        return self.connector.read_board_article_file(path)

    def read_board_treasure_file(
        self, board_id: str, treasure_id: Sequence[str], filename: str
    ) -> bytes:
        """Raw content of a file in a treasure folder of a board."""
        path = self.connector.get_board_treasure_file_path(
            board_id, treasure_id, filename
        )
        logger.debug("path: %s", path)
        return self.connector.read_board_article_file(path)

    def new_board_record(self, args: dict[str, Any]) -> Any:
        """Build a board record of the driver's kind from ``args``."""
        return self._capability("new_board_record")(args)

    def add_board_record(self, record: Any) -> None:
        """Append ``record`` to the board headers file."""
        add = self._capability("add_board_record_file_record")
        path = self.connector.get_board_records_path()
        logger.debug("path: %s", path)
        add(path, record)

    def get_user_article_records(self, user_id: str) -> list[Any]:
        """Articles posted by ``user_id``.

        A driver's cached list is used when it has one and it is not empty;
        otherwise every board except ``ALLPOST`` is scanned.
        """
        get_path = getattr(self.connector, "get_user_article_records_path", None)
        read = getattr(self.connector, "read_user_article_record_file", None)
        if callable(get_path) and callable(read):
            path = get_path(user_id)
            logger.debug("path: %s", path)
            cached = read(path)
            if cached:
                return list(cached)

        records: list[Any] = []
        for board in self.read_board_records():
            board_id = board.board_id
            if board_id in _SKIPPED_BOARDS:
                continue
            records.extend(
                UserArticleRecord(
                    board_id=board_id,
                    title=article.title,
                    owner=article.owner,
                    article_id=article.filename,
                )
                for article in self.read_board_article_records(board_id)
                if article.owner == user_id
            )
        return records