"""Spreadsheet exporters for the customer table (CSV, XLSX and PDF)."""

import csv
import io
from datetime import date, datetime, timezone, tzinfo
from html import escape

from openpyxl import Workbook

from crm.application.interfaces import CustomerExporter
from crm.domain.entities import CustomerRecord

EXPORT_HEADERS = ["STT", "Thời Gian", "Tên Khách Hàng", "Sản Phẩm", "SĐT", "Phân Loại", "Ghi Chú"]
TIME_FORMAT = "%d/%m/%Y %H:%M:%S"


def export_filename(exporter: CustomerExporter, today: date) -> str:
    return f"khach_hang_{today.isoformat()}.{exporter.extension}"


class _TableExporter(CustomerExporter):
    def __init__(self, tz: tzinfo = timezone.utc):
        self._tz = tz

    def _table(self, rows: list[CustomerRecord]) -> list[list[object]]:
        return [
            [
                index,
                record.updated_at.astimezone(self._tz).strftime(TIME_FORMAT),
                record.name,
                record.product,
                record.phone,
                record.category_label,
                record.note or "",
            ]
            for index, record in enumerate(rows, start=1)
        ]


class CsvCustomerExporter(_TableExporter):
    """CSV with a UTF-8 BOM so spreadsheet apps show Vietnamese correctly."""

    media_type = "text/csv; charset=utf-8"
    extension = "csv"

    def export(self, rows: list[CustomerRecord]) -> bytes:
        buffer = io.StringIO(newline="")
        writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC)
        writer.writerow(EXPORT_HEADERS)
        writer.writerows(self._table(rows))
        return buffer.getvalue().encode("utf-8-sig")


class XlsxCustomerExporter(_TableExporter):
    media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    extension = "xlsx"

    def export(self, rows: list[CustomerRecord]) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "KhachHang"
        sheet.append(EXPORT_HEADERS)
        for row in self._table(rows):
            sheet.append(row)

        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()


class PdfCustomerExporter(_TableExporter):
    """Landscape A4 table rendered with PyMuPDF's HTML story layout."""

    media_type = "application/pdf"
    extension = "pdf"

    TITLE = "Danh Sách Khách Hàng"
    _CSS = (
        "h1 {font-size: 16px; text-align: center;}"
        "p {font-size: 10px; text-align: center;}"
        "table {border-collapse: collapse; width: 100%;}"
        "th, td {border: 1px solid #999; padding: 3px; font-size: 9px;}"
        "th {background-color: #e8e8e8; font-weight: bold;}"
    )

    def _html(self, rows: list[CustomerRecord]) -> str:
        header = "".join(f"<th>{escape(h)}</th>" for h in EXPORT_HEADERS)
        body = "".join(
            "<tr>" + "".join(f"<td>{escape(str(cell))}</td>" for cell in row) + "</tr>"
            for row in self._table(rows)
        )
        exported_at = datetime.now(self._tz).strftime(TIME_FORMAT)
        return (
            f"<h1>{escape(self.TITLE)}</h1>"
            f"<p>Ngày xuất: {exported_at}</p>"
            f"<table><tr>{header}</tr>{body}</table>"
        )

    def export(self, rows: list[CustomerRecord]) -> bytes:
        import fitz  # PyMuPDF

        story = fitz.Story(html=self._html(rows), user_css=self._CSS)
        buffer = io.BytesIO()
        writer = fitz.DocumentWriter(buffer)
        mediabox = fitz.paper_rect("a4-l")
        where = mediabox + (36, 36, -36, -36)

        more = True
        while more:
            device = writer.begin_page(mediabox)
            more, _ = story.place(where)
            story.draw(device)
            writer.end_page()
        writer.close()
        return buffer.getvalue()


_EXPORTERS: dict[str, type[_TableExporter]] = {
    "csv": CsvCustomerExporter,
    "xlsx": XlsxCustomerExporter,
    "pdf": PdfCustomerExporter,
}


def exporter_for(fmt: str, tz: tzinfo = timezone.utc) -> CustomerExporter:
    """Raises KeyError for an unknown format."""
    return _EXPORTERS[fmt.lower()](tz)
