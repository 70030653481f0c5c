from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from app.logging.logger import Log
from app.registry.exceptions import DocumentNotFoundError
from app.registry.id_generator import DocumentIdGenerator
from app.registry.models import (
    Document,
    DocumentStatus,
    DocumentSummary,
    ReconcileReport,
    Selection,
)
from app.storage.base import BaseKeyValueStore

DEFAULT_INDEX_KEY = "all_documents"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    return (
        value.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class DocumentRegistry:
    """Keeps per-document primary records and the list index in step.

    The store has no multi-key transactions, so each mutation writes its keys
    in a fixed order and a crash between the two writes leaves a known gap:

    - create writes the index first, then the primary record. An interrupted
      create leaves a projection with no primary record.
    - transition_status writes the primary record first, then the index. An
      interrupted transition leaves a projection with a stale status.

    reconcile() closes both gaps. The registry assumes it is driven by one
    caller at a time; the index read-modify-write is not safe otherwise.
    """

    def __init__(
        self,
        store: BaseKeyValueStore,
        id_generator: DocumentIdGenerator | None = None,
        now: Callable[[], datetime] = _utc_now,
        index_key: str = DEFAULT_INDEX_KEY,
    ) -> None:
        self._store = store
        self._id_generator = id_generator or DocumentIdGenerator()
        self._now = now
        self._index_key = index_key

    def create(self, title: str, doc_type: str, urls: Sequence[str]) -> Document:
        """Create a Pending document and prepend its projection to the index."""
        document = Document(
            id=self._new_id(),
            title=title,
            type=doc_type,
            status=DocumentStatus.PENDING,
            created_at=format_timestamp(self._now()),
            urls=list(urls),
        )

        index = self._read_index()
        index.insert(0, document.summary())
        self._write_index(index)
        self._store.put(document.id, document.to_dict())

        Log.info(f"Created document {document.id} ({document.type})")
        return document

    def get(self, document_id: str) -> Document:
        """Read a primary record.

        Raises:
            DocumentNotFoundError: if no record exists for document_id.
        """
        data = self._store.get(document_id)
        if data is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return Document.from_dict(data)

    def list_documents(self) -> list[DocumentSummary]:
        """Return the index record, newest first. Empty if nothing was created."""
        return self._read_index()

    def replace_selections(
        self, document_id: str, selections: Sequence[Selection]
    ) -> bool:
        """Replace all selections of a document. The index is not touched.

        Returns False (and writes nothing) when the document does not exist.
        """
        document = self._find(document_id)
        if document is None:
            Log.warning(f"Selections update skipped: document {document_id} not found")
            return False

        document.selections = list(selections)
        self._store.put(document.id, document.to_dict())
        Log.info(
            f"Replaced selections of document {document_id}: {len(selections)} items"
        )
        return True

    def transition_status(self, document_id: str, status: DocumentStatus) -> bool:
        """Set a document's status in its primary record and its projection.

        Returns False (and writes nothing) when the document does not exist.
        """
        document = self._find(document_id)
        if document is None:
            Log.warning(f"Status update skipped: document {document_id} not found")
            return False

        previous = document.status
        document.status = status
        self._store.put(document.id, document.to_dict())

        index = self._read_index()
        updated = [
            document.summary() if entry.id == document_id else entry
            for entry in index
        ]
        self._write_index(updated)

        Log.info(
            f"Document {document_id} status: {previous.value} -> {status.value}"
        )
        return True

    def check(self) -> ReconcileReport:
        """Compare the index against primary records without writing."""
        report, _ = self._compare()
        return report

    def reconcile(self) -> ReconcileReport:
        """Drop orphaned projections and refresh stale ones, keeping order."""
        report, repaired = self._compare()
        if report.consistent:
            Log.debug("Index is consistent, nothing to reconcile")
            return report

        self._write_index(repaired)
        report.applied = True
        Log.warning(
            f"Reconciled index: dropped {report.dropped}, refreshed {report.refreshed}"
        )
        return report

    def _compare(self) -> tuple[ReconcileReport, list[DocumentSummary]]:
        report = ReconcileReport()
        repaired: list[DocumentSummary] = []
        for entry in self._read_index():
            data = self._store.get(entry.id)
            if data is None:
                report.dropped.append(entry.id)
                continue
            current = Document.from_dict(data).summary()
            if current != entry:
                report.refreshed.append(entry.id)
            repaired.append(current)
        return report, repaired

    def _new_id(self) -> str:
        document_id = self._id_generator.next_id()
        while self._store.get(document_id) is not None:
            document_id = self._id_generator.next_id()
        return document_id

    def _find(self, document_id: str) -> Document | None:
        data = self._store.get(document_id)
        if data is None:
            return None
        return Document.from_dict(data)

    def _read_index(self) -> list[DocumentSummary]:
        entries = self._store.get(self._index_key) or []
        return [DocumentSummary.from_dict(entry) for entry in entries]

    def _write_index(self, entries: list[DocumentSummary]) -> None:
        self._store.put(self._index_key, [entry.to_dict() for entry in entries])
