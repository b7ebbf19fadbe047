"""Spreadsheet-to-text adapter.

The first sheet is converted into a list of row objects keyed by the header
row and serialized as JSON, so the row/column structure survives as text.
"""

import io
import json
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time
from typing import Any

import openpyxl
import xlrd

from app.text_extraction.base import BaseTextExtractor
from app.text_extraction.exceptions import (
    CorruptInputError,
    InvalidFormatError,
    NoSheetsError,
    NoTextContentError,
    TextExtractionError,
)
from app.text_extraction.models import ExtractedText, SourceFormat

_XLSX_MAGIC = b"PK\x03\x04"
_XLS_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

Row = Sequence[Any]


class SpreadsheetAdapter(BaseTextExtractor):
    """Serializes the first sheet of an .xlsx/.xls workbook to JSON rows."""

    SOURCE_FORMAT = SourceFormat.SPREADSHEET

    def extract(self, content: bytes) -> ExtractedText:
        if content.startswith(_XLSX_MAGIC):
            reader = self._read_xlsx
        elif content.startswith(_XLS_MAGIC):
            reader = self._read_xls
        else:
            raise InvalidFormatError("File is not an .xlsx or .xls workbook")

        try:
            rows = reader(content)
        except TextExtractionError:
            raise
        except Exception as exc:
            raise CorruptInputError(f"spreadsheet extraction failed: {exc}") from exc

        if not rows:
            raise NoTextContentError("First sheet of the workbook is empty")
        records = rows_to_records(rows)
        return ExtractedText(
            text=json.dumps(records, ensure_ascii=False, default=str),
            source_format=self.SOURCE_FORMAT,
        )

    @staticmethod
    def _read_xlsx(content: bytes) -> list[Row]:
        workbook = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
        try:
            if not workbook.worksheets:
                raise NoSheetsError("Workbook contains no sheets")
            sheet = workbook.worksheets[0]
            return _non_blank(sheet.iter_rows(values_only=True))
        finally:
            workbook.close()

    @staticmethod
    def _read_xls(content: bytes) -> list[Row]:
        book = xlrd.open_workbook(file_contents=content)
        if book.nsheets == 0:
            raise NoSheetsError("Workbook contains no sheets")
        sheet = book.sheet_by_index(0)
        return _non_blank(
            [_xls_cell_value(cell, book.datemode) for cell in sheet.row(index)]
            for index in range(sheet.nrows)
        )


def rows_to_records(rows: Sequence[Row]) -> list[dict[str, Any]]:
    """Turn a header row plus data rows into row objects.

    Empty cells are omitted from each object.
    """
    headers = _make_headers(rows[0])
    records: list[dict[str, Any]] = []
    for row in rows[1:]:
        record: dict[str, Any] = {}
        for index, value in enumerate(row):
            if _is_blank(value):
                continue
            if index >= len(headers):
                headers.extend(_make_headers([None] * (index + 1 - len(headers)), headers))
            record[headers[index]] = _json_value(value)
        records.append(record)
    return records


def _make_headers(cells: Row, existing: list[str] | None = None) -> list[str]:
    seen: dict[str, int] = {}
    for name in existing or []:
        seen[name] = seen.get(name, 0) + 1
    headers: list[str] = []
    for cell in cells:
        base = "__EMPTY" if _is_blank(cell) else str(cell).strip()
        count = seen.get(base, 0)
        headers.append(base if count == 0 else f"{base}_{count}")
        seen[base] = count + 1
    return headers


def _non_blank(rows: Iterable[Row]) -> list[Row]:
    return [row for row in rows if not all(_is_blank(value) for value in row)]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _json_value(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _xls_cell_value(cell: Any, datemode: int) -> Any:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
        return None
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    return cell.value
