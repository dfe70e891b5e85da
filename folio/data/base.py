"""Base class for row cursors feeding sections and datalists."""

from abc import ABC, abstractmethod
from typing import Any

Row = dict[str, Any]


class RowCursor(ABC):
    """Forward-only provider of rows.

    Subclasses implement execute(), fetch_next() and reset(). A cursor runs
    one statement at a time; ``query`` is the text actually sent to the data
    source and ``query_raw`` the template text before tag substitution.
    """

    adapter = "cursor"

    def __init__(self, query: str = ""):
        self._query = query
        self._query_raw = query
        self._current: Row | None = None
        self._count = 0

    @abstractmethod
    def execute(self) -> None:
        """Run the query. Raises DataAccessError on failure."""

    @abstractmethod
    def fetch_next(self) -> Row | None:
        """Advance one record; ``None`` signals exhaustion."""

    @abstractmethod
    def reset(self) -> None:
        """Drop any pending result and return to the initial state."""

    def has_more_records(self) -> bool:
        """True while the last fetch produced a row."""
        return self._current is not None

    def record_count(self) -> int:
        return self._count

    @property
    def query(self) -> str:
        return self._query

    @query.setter
    def query(self, value: str) -> None:
        self._query = value

    @property
    def query_raw(self) -> str:
        return self._query_raw

    @query_raw.setter
    def query_raw(self, value: str) -> None:
        self._query_raw = value


class BufferedCursor(RowCursor):
    """Cursor whose execute() loads the whole result into memory.

    Subclasses fetch their rows and hand them to ``_load()``; iteration and
    reset are shared.
    """

    def __init__(self, query: str = ""):
        super().__init__(query)
        self._rows: list[Row] = []
        self._pos: int | None = None

    def _load(self, rows: list[Row]) -> None:
        self._rows = rows
        self._pos = 0
        self._count = len(rows)

    def fetch_next(self) -> Row | None:
        if self._pos is not None and self._pos < len(self._rows):
            self._current = self._rows[self._pos]
            self._pos += 1
            return self._current
        self._current = None
        return None

    def reset(self) -> None:
        self._rows = []
        self._pos = None
        self._current = None
        self._count = 0
