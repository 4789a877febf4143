# backend/models/table_models.py

from enum import Enum
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict

NO_DATA_MESSAGE = "There is not data, upload a CSV file first"


class UploadError(str, Enum):
    """
    Client-side upload rejections. The value is the message sent back.
    """
    MISSING_FILE = "A file must be provided"
    UNSUPPORTED_MEDIA_TYPE = "The file type must be CSV"
    EMPTY_FILE = "The file must not be empty"
    NO_RECORDS = "Send a file with records"
    INVALID_ENCODING = "The file must be UTF-8 encoded"
    FILE_TOO_LARGE = "The file is too large"


class Record(BaseModel):
    """
    One data row, stored positionally. Cells line up with Table.columns
    but a malformed row may be shorter or longer than the header.
    """
    model_config = ConfigDict(frozen=True)

    cells: Tuple[str, ...]

    def to_mapping(self, columns: Tuple[str, ...]) -> Dict[str, Optional[str]]:
        """
        Column name -> value view for presentation.
          - missing cells map to None
          - cells past the last column are left out
          - a repeated column name keeps the later value
        """
        item: Dict[str, Optional[str]] = {}
        for index, key in enumerate(columns):
            item[key] = self.cells[index] if index < len(self.cells) else None
        return item


class Table(BaseModel):
    model_config = ConfigDict(frozen=True)

    columns: Tuple[str, ...]
    records: Tuple[Record, ...]

    def as_mappings(self) -> List[Dict[str, Optional[str]]]:
        return [r.to_mapping(self.columns) for r in self.records]


class ParseResult(BaseModel):
    """
    Outcome of parsing an upload: either a table or the reason it was refused.
    """
    model_config = ConfigDict(frozen=True)

    table: Optional[Table] = None
    error: Optional[UploadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.table is not None

    @classmethod
    def success(cls, table: Table) -> "ParseResult":
        return cls(table=table)

    @classmethod
    def failure(cls, error: UploadError) -> "ParseResult":
        return cls(error=error)


class QueryResult(BaseModel):
    """
    Outcome of a search. `message` is set only when no table is loaded;
    otherwise `data` holds the (possibly empty) list of matching rows.
    """
    data: Optional[List[Dict[str, Optional[str]]]] = None
    message: Optional[str] = None

    @property
    def loaded(self) -> bool:
        return self.message is None
