"""Customer import service — runs an import source through the store."""

from crm.application.interfaces import ImportSource
from crm.application.services.customer_store import CustomerStore
from crm.domain.entities import ImportReport
from crm.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage


class CustomerImportService:
    """Reads candidates from a source and bulk-imports them.

    A source that cannot be read raises ``ImportSourceError`` before the
    store is touched; individual bad rows end up in the report instead.
    """

    def __init__(self, store: CustomerStore):
        self._store = store
        self._log = PipelineLogger("CustomerImport")

    def import_from(self, source: ImportSource) -> ImportReport:
        with self._log.timed_step(PipelineStage.READ, f"Reading {source.label}"):
            candidates = source.read()

        with self._log.timed_step(PipelineStage.IMPORT, "Importing rows", rows=len(candidates)):
            report = self._store.bulk_import(candidates, source_label=source.label)

        for rejection in report.rejections:
            self._log.rejection(rejection.source_ref, rejection.reason)

        if report.persistence_error is not None:
            self._log.warning(PipelineStage.PERSIST, str(report.persistence_error))

        self._log.step_complete(
            PipelineStage.COMPLETE,
            f"Imported {source.label}",
            accepted=report.accepted_count,
            rejected=report.rejected_count,
        )
        return report
