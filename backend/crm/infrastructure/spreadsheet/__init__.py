from .import_source import CsvImportSource, XlsxImportSource, import_source_for, supported_extensions
from .exporters import (
    EXPORT_HEADERS,
    CsvCustomerExporter,
    PdfCustomerExporter,
    XlsxCustomerExporter,
    export_filename,
    exporter_for,
)

__all__ = [
    "CsvImportSource",
    "XlsxImportSource",
    "import_source_for",
    "supported_extensions",
    "EXPORT_HEADERS",
    "CsvCustomerExporter",
    "PdfCustomerExporter",
    "XlsxCustomerExporter",
    "export_filename",
    "exporter_for",
]
