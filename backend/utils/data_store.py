# backend/utils/data_store.py

import threading
from typing import Optional

from models.table_models import NO_DATA_MESSAGE, QueryResult, Table
from services.search_engine import find_coincidences


class TableStore:
    """
    Holds the one current Table, or nothing before the first upload.

    The lock only guards the reference swap. Tables are frozen, so a
    snapshot can be searched after the lock is released while the next
    upload is being parsed or installed.
    """

    def __init__(self, dedupe_matches: bool = False):
        self._table: Optional[Table] = None
        self._lock = threading.Lock()
        self.dedupe_matches = dedupe_matches

    def replace(self, table: Table) -> None:
        """
        Install `table` as the current state. Last writer wins, no merge.
        """
        with self._lock:
            self._table = table

    def snapshot(self) -> Optional[Table]:
        with self._lock:
            return self._table

    def clear(self) -> None:
        with self._lock:
            self._table = None

    @property
    def loaded(self) -> bool:
        return self.snapshot() is not None

    def query(self, term: Optional[str] = None) -> QueryResult:
        """
        Search the current table. Never raises:
          - nothing uploaded yet -> QueryResult(message=NO_DATA_MESSAGE)
          - no term              -> every record
          - term                 -> coincidences (possibly empty)
        """
        table = self.snapshot()

        if table is None:
            return QueryResult(message=NO_DATA_MESSAGE)

        if not term:
            return QueryResult(data=table.as_mappings())

        return QueryResult(data=find_coincidences(table, term, self.dedupe_matches))
