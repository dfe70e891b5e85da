"""DB-API 2 cursor — runs a parameterised SQL query on any PEP 249 connection."""

import logging
from typing import Any, Sequence

from folio.data.base import Row, RowCursor
from folio.errors import DataAccessError

logger = logging.getLogger(__name__)


class DbApiCursor(RowCursor):
    """Executes ``query`` with positional ``args`` and fetches rows as dicts.

    The record count comes from a secondary ``SELECT COUNT(*)`` wrapped around
    the query; if that fails the count is 0 and iteration still works.
    """

    adapter = "DbApiCursor"

    def __init__(self, connection: Any, query: str, args: Sequence[Any] = ()):
        super().__init__(query)
        self._conn = connection
        self._args = tuple(args)
        self._cursor: Any = None
        self._columns: list[str] = []

    def execute(self) -> None:
        self.reset()
        try:
            cur = self._conn.cursor()
            cur.execute(self._query, self._args)
        except Exception as exc:
            raise DataAccessError(self.adapter, f"query failed [{self._query}]: {exc}") from exc
        self._cursor = cur
        self._columns = [d[0] for d in cur.description or []]
        self._count = self._count_rows()

    def _count_rows(self) -> int:
        count_query = f"SELECT COUNT(*) AS count_num_rec FROM ({self._query}) AS count_alias"
        try:
            cur = self._conn.cursor()
            cur.execute(count_query, self._args)
            row = cur.fetchone()
            cur.close()
            return int(row[0]) if row else 0
        except Exception as exc:
            logger.warning("Record count failed for [%s]: %s", self._query, exc)
            return 0

    def fetch_next(self) -> Row | None:
        if self._cursor is None:
            self._current = None
            return None
        try:
            values = self._cursor.fetchone()
        except Exception as exc:
            raise DataAccessError(self.adapter, f"fetch failed [{self._query}]: {exc}") from exc
        if values is None:
            self._current = None
            return None
        self._current = dict(zip(self._columns, values))
        return self._current

    def reset(self) -> None:
        if self._cursor is not None:
            try:
                self._cursor.close()
            except Exception as exc:
                logger.warning("Error closing cursor: %s", exc)
        self._cursor = None
        self._columns = []
        self._current = None
        self._count = 0
