"""Non-paginated cursor walker feeding chart series."""

import logging

from folio.data.base import Row, RowCursor

logger = logging.getLogger(__name__)


class Datalist:
    def __init__(self, list_id: str, cursor: RowCursor | None = None):
        self.id = list_id
        self.cursor = cursor
        self.row: Row | None = None
        self._record_index = 0
        self._end_of_data = True
        self.reset()

    def reset(self) -> None:
        self.row = None
        self._record_index = 0
        self._end_of_data = True
        if self.cursor is not None:
            self.cursor.reset()

    def execute_query(self) -> int:
        if self.cursor is None:
            return 0
        if self.row is not None:
            return self.cursor.record_count()
        self.reset()
        self.cursor.execute()
        self.next_record()
        self._end_of_data = not self.cursor.has_more_records()
        logger.debug("Datalist '%s' executed: %d records", self.id, self.cursor.record_count())
        return self.cursor.record_count()

    def next_record(self) -> None:
        if self.cursor is None:
            return
        row = self.cursor.fetch_next()
        if row is None:
            self.row = None
            self._end_of_data = True
            return
        self.row = row
        self._record_index += 1
        self._end_of_data = False

    def end_of_data(self) -> bool:
        return self._end_of_data

    @property
    def record_index(self) -> int:
        return self._record_index

    @property
    def query(self) -> str:
        return self.cursor.query if self.cursor is not None else ""

    @query.setter
    def query(self, value: str) -> None:
        if self.cursor is not None:
            self.cursor.query = value

    @property
    def query_raw(self) -> str:
        return self.cursor.query_raw if self.cursor is not None else ""

    @query_raw.setter
    def query_raw(self, value: str) -> None:
        if self.cursor is not None:
            self.cursor.query_raw = value
