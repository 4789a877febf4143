# backend/services/search_engine.py

from typing import Dict, List, Optional
from models.table_models import Table


def find_coincidences(
    table: Table,
    term: str,
    dedupe: bool = False,
) -> List[Dict[str, Optional[str]]]:
    """
    Case-insensitive substring search over the mapping view of each record.

    Only values visible in the mapping are searched: cells past the header
    are ignored and a repeated column is matched on its later value only.
    Without `dedupe` a record is appended once per matching value, so a row
    with two hits shows up twice. Results keep upload order.
    """
    q = term.lower()
    coincidences: List[Dict[str, Optional[str]]] = []

    for record in table.records:
        item = record.to_mapping(table.columns)
        hits = sum(1 for value in item.values() if value is not None and q in value.lower())
        if not hits:
            continue

        if dedupe:
            coincidences.append(item)
        else:
            coincidences.extend(dict(item) for _ in range(hits))

    return coincidences
