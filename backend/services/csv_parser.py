# backend/services/csv_parser.py

from typing import Any, List, Optional
from starlette.datastructures import UploadFile
from starlette.concurrency import run_in_threadpool

from models.table_models import ParseResult, Record, Table, UploadError
from utils.settings import ParserOptions

CSV_MEDIA_TYPE = "text/csv"


def _split_lines(text: str, skip_blank_lines: bool) -> List[str]:
    lines = [line[:-1] if line.endswith("\r") else line for line in text.rstrip().split("\n")]
    if skip_blank_lines:
        lines = [line for line in lines if line.strip()]
    return lines


def _split_cells(line: str, trim_cells: bool) -> List[str]:
    # Literal split: no quoting, a comma always ends a cell.
    cells = line.split(",")
    if trim_cells:
        cells = [c.strip() for c in cells]
    return cells


def parse_table(
    text: Optional[str],
    content_type: Optional[str],
    options: Optional[ParserOptions] = None,
) -> ParseResult:
    """
    Turn uploaded CSV text into a Table.

    Checks run in order and the first failure is returned:
      1. no file            -> MISSING_FILE
      2. not text/csv       -> UNSUPPORTED_MEDIA_TYPE
      3. zero-length text   -> EMPTY_FILE
      4. header but no rows -> NO_RECORDS

    Pure function, never raises.
    """
    options = options or ParserOptions()

    if text is None:
        return ParseResult.failure(UploadError.MISSING_FILE)

    if content_type != CSV_MEDIA_TYPE:
        return ParseResult.failure(UploadError.UNSUPPORTED_MEDIA_TYPE)

    if len(text) == 0:
        return ParseResult.failure(UploadError.EMPTY_FILE)

    lines = _split_lines(text, options.skip_blank_lines)
    if len(lines) < 2:
        return ParseResult.failure(UploadError.NO_RECORDS)

    keys, *rows = [_split_cells(line, options.trim_cells) for line in lines]

    table = Table(
        columns=tuple(keys),
        records=tuple(Record(cells=tuple(cells)) for cells in rows),
    )
    return ParseResult.success(table)


async def parse_csv(
    file: Any,
    options: Optional[ParserOptions] = None,
    max_bytes: Optional[int] = None,
) -> ParseResult:
    """
    Read an uploaded file and parse it off the event loop.
    The store is never touched here; callers install the table themselves.

    `file` is whatever the form held under "file"; anything that is not an
    uploaded file part (absent, or a plain text field) counts as missing.
    """
    if not isinstance(file, UploadFile):
        return ParseResult.failure(UploadError.MISSING_FILE)

    if file.content_type != CSV_MEDIA_TYPE:
        return ParseResult.failure(UploadError.UNSUPPORTED_MEDIA_TYPE)

    if max_bytes is not None:
        content = await file.read(max_bytes + 1)
        if len(content) > max_bytes:
            return ParseResult.failure(UploadError.FILE_TOO_LARGE)
    else:
        content = await file.read()

    try:
        decoded = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return ParseResult.failure(UploadError.INVALID_ENCODING)

    return await run_in_threadpool(parse_table, decoded, file.content_type, options)
