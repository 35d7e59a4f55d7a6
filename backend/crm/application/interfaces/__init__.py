from .record_storage import RecordStorage
from .confirmation import Confirmation
from .import_source import ImportSource
from .customer_exporter import CustomerExporter

__all__ = [
    "RecordStorage",
    "Confirmation",
    "ImportSource",
    "CustomerExporter",
]
