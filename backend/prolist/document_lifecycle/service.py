"""DocumentLifecycleManager — generate, upload, review and restore document versions.

Each operation is one read → compute → write under the (shipment, key)
lock. New state is computed by the pure functions in versions.py and
committed with a single DocumentStore.put, which also checks the record's
revision.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from prolist.config import Settings
from prolist.document_catalogue.reconciler import new_required_record
from prolist.document_lifecycle.locks import KeyedLockRegistry
from prolist.document_lifecycle.metadata import is_system_renderable
from prolist.document_lifecycle.numbering import next_document_number
from prolist.document_lifecycle.status import is_approval, normalize_status
from prolist.document_lifecycle.versions import (
    append_version,
    change_status,
    select_current_version,
)
from prolist.exceptions import (
    DocumentNotFound,
    DocumentWorkflowError,
    MissingRequiredParty,
    ProductNotFound,
    RenderFailed,
    ShipmentNotFound,
    UnsupportedDocumentKey,
)
from prolist.ids import IdFactory, new_id
from prolist.models.document import DocumentKey, DocumentStatus
from prolist.renderers.base import (
    DocumentRenderer,
    RenderContext,
    RenderedDocument,
    RenderLine,
    compute_totals,
)
from prolist.schemas.document import DocumentRecord, GenerateDocumentRequest
from prolist.schemas.shipment import Shipment
from prolist.storage.base import DocumentStore, EventRecorder, SequenceStore, ShipmentRepository
from prolist.storage.files import FileStorage

logger = logging.getLogger("prolist.document_lifecycle")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentLifecycleManager:
    """State-changing operations on a single document record."""

    def __init__(
        self,
        settings: Settings,
        *,
        shipments: ShipmentRepository,
        documents: DocumentStore,
        sequences: SequenceStore,
        events: EventRecorder,
        files: FileStorage,
        renderer: DocumentRenderer,
        locks: KeyedLockRegistry,
        id_factory: IdFactory = new_id,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.default_actor = settings.default_actor
        self.shipments = shipments
        self.documents = documents
        self.sequences = sequences
        self.events = events
        self.files = files
        self.renderer = renderer
        self.locks = locks
        self.id_factory = id_factory
        self.clock = clock

    async def generate(
        self,
        shipment_id: str,
        doc_key: DocumentKey,
        request: GenerateDocumentRequest,
        actor: str | None = None,
    ) -> DocumentRecord:
        """Render a commercial document and append it as the new current version."""
        if not is_system_renderable(doc_key):
            raise UnsupportedDocumentKey(doc_key.value)
        actor = actor or request.created_by or self.default_actor

        shipment = await self._require_shipment(shipment_id)
        context = await self._render_context(shipment, doc_key, request)
        rendered = await self._render(context)
        file_ref = await self.files.save(rendered.file_name, rendered.content)

        try:
            async with self.locks.hold(shipment_id, doc_key):
                record = await self._load_or_new(shipment_id, doc_key)
                updated = append_version(
                    record,
                    version_id=self.id_factory(),
                    file_ref=file_ref,
                    file_name=rendered.file_name,
                    created_by=actor,
                    created_at=self.clock(),
                    note=f"Generated {doc_key.value}",
                )
                stored = await self.documents.put(updated)
        except Exception:
            await self._discard_file(file_ref)
            raise

        logger.info(
            "Generated %s v%d for shipment %s (number %s)",
            doc_key.value, stored.current_version, shipment_id, context.number,
        )
        await self.events.record(
            "DOCUMENT_GENERATED",
            shipment_id=shipment_id,
            entity_id=stored.id,
            actor=actor,
            data={
                "doc_key": doc_key.value,
                "version": stored.current_version,
                "number": context.number,
            },
        )
        return stored

    async def upload_version(
        self,
        shipment_id: str,
        doc_key: DocumentKey,
        file_name: str,
        content: bytes,
        note: str | None = None,
        actor: str | None = None,
    ) -> DocumentRecord:
        """Store an externally produced file as the new current version."""
        actor = actor or self.default_actor
        await self._require_shipment(shipment_id)
        file_ref = await self.files.save(file_name, content)

        try:
            async with self.locks.hold(shipment_id, doc_key):
                record = await self._load_or_new(shipment_id, doc_key)
                updated = append_version(
                    record,
                    version_id=self.id_factory(),
                    file_ref=file_ref,
                    file_name=file_name,
                    created_by=actor,
                    created_at=self.clock(),
                    note=note or f"Uploaded {file_name}",
                )
                stored = await self.documents.put(updated)
        except Exception:
            await self._discard_file(file_ref)
            raise

        logger.info(
            "Uploaded %s v%d for shipment %s (%s, %d bytes)",
            doc_key.value, stored.current_version, shipment_id, file_name, len(content),
        )
        await self.events.record(
            "DOCUMENT_VERSION_UPLOADED",
            shipment_id=shipment_id,
            entity_id=stored.id,
            actor=actor,
            data={
                "doc_key": doc_key.value,
                "version": stored.current_version,
                "file_name": file_name,
            },
        )
        return stored

    async def set_status(
        self,
        shipment_id: str,
        doc_key: DocumentKey,
        status: DocumentStatus | str,
        note: str | None = None,
        actor: str | None = None,
    ) -> DocumentRecord:
        """Move a document through review (approve, reject, submit, ...)."""
        actor = actor or self.default_actor
        target = normalize_status(status)

        async with self.locks.hold(shipment_id, doc_key):
            record = await self._require_record(shipment_id, doc_key)
            previous = record.status
            updated = change_status(record, target, note)
            stored = await self.documents.put(updated)

        event_type = "DOCUMENT_APPROVED" if is_approval(target) else "DOCUMENT_STATUS_CHANGED"
        logger.info(
            "%s for shipment %s: %s -> %s",
            doc_key.value, shipment_id, previous.value, target.value,
        )
        await self.events.record(
            event_type,
            shipment_id=shipment_id,
            entity_id=stored.id,
            actor=actor,
            data={
                "doc_key": doc_key.value,
                "version": stored.current_version,
                "previous_status": previous.value,
                "status": target.value,
                "note": note,
            },
        )
        return stored

    async def set_current_version(
        self,
        shipment_id: str,
        doc_key: DocumentKey,
        version: int,
        actor: str | None = None,
    ) -> DocumentRecord:
        """Restore an earlier version as current; history is kept."""
        actor = actor or self.default_actor

        async with self.locks.hold(shipment_id, doc_key):
            record = await self._require_record(shipment_id, doc_key)
            previous = record.current_version
            updated = select_current_version(record, version)
            stored = await self.documents.put(updated)

        logger.info(
            "%s for shipment %s: current version %s -> %d",
            doc_key.value, shipment_id, previous, version,
        )
        await self.events.record(
            "DOCUMENT_CURRENT_VERSION_SET",
            shipment_id=shipment_id,
            entity_id=stored.id,
            actor=actor,
            data={"doc_key": doc_key.value, "previous_version": previous, "version": version},
        )
        return stored

    # ── helpers ──

    async def _discard_file(self, file_ref: str) -> None:
        # The version was never recorded, so nothing references the file.
        logger.warning("Discarding unrecorded file %s", file_ref)
        await self.files.delete(file_ref)

    async def _require_shipment(self, shipment_id: str) -> Shipment:
        shipment = await self.shipments.get(shipment_id)
        if shipment is None:
            raise ShipmentNotFound(shipment_id)
        return shipment

    async def _require_record(self, shipment_id: str, doc_key: DocumentKey) -> DocumentRecord:
        record = await self.documents.get(shipment_id, doc_key)
        if record is None:
            raise DocumentNotFound(shipment_id, doc_key.value)
        return record

    async def _load_or_new(self, shipment_id: str, doc_key: DocumentKey) -> DocumentRecord:
        record = await self.documents.get(shipment_id, doc_key)
        if record is None:
            record = new_required_record(shipment_id, doc_key, self.id_factory)
        return record

    async def _render_context(
        self,
        shipment: Shipment,
        doc_key: DocumentKey,
        request: GenerateDocumentRequest,
    ) -> RenderContext:
        parties = await self.shipments.list_parties()
        buyer = next((p for p in parties if p.name == shipment.buyer), None)
        if buyer is None:
            raise MissingRequiredParty(shipment.buyer)

        catalogue = {p.id: p for p in await self.shipments.list_products()}
        lines = []
        for item in shipment.items:
            product = catalogue.get(item.product_id)
            if product is None:
                raise ProductNotFound(item.product_id)
            lines.append(RenderLine(product=product, quantity=item.quantity))

        number = request.number or await next_document_number(
            self.sequences, doc_key, request.date.year
        )
        return RenderContext(
            doc_key=doc_key,
            shipment=shipment,
            company=await self.shipments.get_company(),
            buyer=buyer,
            lines=lines,
            totals=compute_totals(lines),
            number=number,
            date=request.date,
            signature_name=request.signature_name,
        )

    async def _render(self, context: RenderContext) -> RenderedDocument:
        try:
            return await self.renderer.render(context)
        except DocumentWorkflowError:
            raise
        except Exception as e:
            logger.warning("Renderer failed for %s: %s", context.doc_key.value, e)
            raise RenderFailed(context.doc_key.value, str(e)) from e
