"""Cursors over in-memory rows or rows produced by a callable."""

import logging
from typing import Any, Callable, Iterable

from folio.data.base import BufferedCursor, Row
from folio.errors import DataAccessError

logger = logging.getLogger(__name__)


class ListCursor(BufferedCursor):
    """Serves a fixed list of rows; the query text is ignored."""

    adapter = "ListCursor"

    def __init__(self, rows: Iterable[Row], query: str = ""):
        super().__init__(query)
        self._source = [dict(r) for r in rows]

    def execute(self) -> None:
        self.reset()
        self._load([dict(r) for r in self._source])


class CallbackCursor(BufferedCursor):
    """Calls ``loader(query)`` on execute and walks the rows it returns.

    The query is tag-resolved by the engine before execution, so a child
    section can pass ``{parent.field}`` values through it.
    """

    adapter = "CallbackCursor"

    def __init__(self, loader: Callable[[str], Iterable[Row]], query: str = ""):
        super().__init__(query)
        self._loader = loader

    def execute(self) -> None:
        self.reset()
        try:
            rows: Any = self._loader(self._query)
            loaded = [dict(r) for r in rows or []]
        except DataAccessError:
            raise
        except Exception as exc:
            raise DataAccessError(self.adapter, f"loader failed for query '{self._query}': {exc}") from exc
        self._load(loaded)
        logger.debug("CallbackCursor loaded %d rows for %r", self._count, self._query)
