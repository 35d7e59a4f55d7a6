"""Spreadsheet import sources — CSV via the csv module, XLSX via openpyxl.

Row references follow what a user sees when they open the file: the header
is line/row 1, so the first data row is reported as 2.
"""

import csv
import io
import logging
import zipfile
from pathlib import Path
from typing import Any

from openpyxl import load_workbook

from crm.application.interfaces import ImportSource
from crm.domain.entities import ImportCandidate
from crm.domain.exceptions import ImportSourceError

logger = logging.getLogger(__name__)


class CsvImportSource(ImportSource):
    """Reads a CSV file whose first line holds the column headers."""

    def __init__(self, content: bytes, label: str = "CSV"):
        self._content = content
        self.label = label

    def read(self) -> list[ImportCandidate]:
        try:
            text = self._content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ImportSourceError(f"{self.label} is not UTF-8 encoded") from exc

        reader = csv.reader(io.StringIO(text, newline=""))
        try:
            headers = [h.strip() for h in next(reader)]
        except StopIteration:
            return []
        except csv.Error as exc:
            raise ImportSourceError(f"Cannot parse {self.label}: {exc}") from exc

        candidates: list[ImportCandidate] = []
        try:
            for values in reader:
                if not any(v.strip() for v in values):
                    continue
                data = {
                    header: value.strip()
                    for header, value in zip(headers, values)
                    if header and value.strip()
                }
                candidates.append(ImportCandidate(source_ref=reader.line_num, data=data))
        except csv.Error as exc:
            raise ImportSourceError(f"Cannot parse {self.label} at line {reader.line_num}: {exc}") from exc

        logger.debug("Read %d rows from %s", len(candidates), self.label)
        return candidates


class XlsxImportSource(ImportSource):
    """Reads the first worksheet of an Excel workbook."""

    def __init__(self, content: bytes, label: str = "Excel"):
        self._content = content
        self.label = label

    def read(self) -> list[ImportCandidate]:
        try:
            workbook = load_workbook(io.BytesIO(self._content), read_only=True, data_only=True)
        except (zipfile.BadZipFile, KeyError, ValueError, OSError) as exc:
            raise ImportSourceError(f"Cannot open {self.label}: {exc}") from exc

        try:
            sheet = workbook.worksheets[0]
            rows = sheet.iter_rows(values_only=True)
            header_row = next(rows, None)
            if header_row is None:
                return []
            headers = [str(h).strip() if h is not None else "" for h in header_row]

            candidates: list[ImportCandidate] = []
            for row_number, values in enumerate(rows, start=2):
                data: dict[str, Any] = {
                    header: value
                    for header, value in zip(headers, values)
                    if header and value is not None and str(value).strip()
                }
                if data:
                    candidates.append(ImportCandidate(source_ref=row_number, data=data))
        finally:
            workbook.close()

        logger.debug("Read %d rows from %s", len(candidates), self.label)
        return candidates


_SOURCES: dict[str, type[ImportSource]] = {
    ".csv": CsvImportSource,
    ".xlsx": XlsxImportSource,
}


def supported_extensions() -> list[str]:
    return list(_SOURCES)


def import_source_for(content: bytes, filename: str) -> ImportSource:
    """Pick the import source matching the file extension.

    Raises:
        ImportSourceError: The extension is not supported.
    """
    suffix = Path(filename).suffix.lower()
    if suffix == ".xls":
        # openpyxl only reads the OOXML format.
        raise ImportSourceError("File .xls (Excel 97-2003) không được hỗ trợ, hãy lưu lại dưới dạng .xlsx")
    source_cls = _SOURCES.get(suffix)
    if source_cls is None:
        raise ImportSourceError(
            f"Định dạng file không được hỗ trợ: {suffix or filename} "
            f"(hỗ trợ: {', '.join(supported_extensions())})"
        )
    return source_cls(content, label=filename)
