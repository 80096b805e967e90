"""SQLAlchemy-backed repositories.

All of them work on the request's AsyncSession and only flush; committing
is left to the session owner (get_db).
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from prolist.exceptions import ConcurrentModification
from prolist.models.document import (
    DocumentKey,
    DocumentSequence,
    ShipmentDocument,
    ShipmentDocumentVersion,
)
from prolist.models.shipment import Party as PartyRow
from prolist.models.shipment import Product as ProductRow
from prolist.models.shipment import Shipment as ShipmentRow
from prolist.schemas.document import DocumentRecord, DocumentVersion
from prolist.schemas.shipment import Company, Party, Product, Shipment

logger = logging.getLogger("prolist.storage.sql")


class SqlShipmentRepository:
    def __init__(self, db: AsyncSession, company: Company):
        self.db = db
        self.company = company

    async def get(self, shipment_id: str) -> Shipment | None:
        result = await self.db.execute(select(ShipmentRow).where(ShipmentRow.id == shipment_id))
        row = result.scalar_one_or_none()
        return Shipment.model_validate(row) if row is not None else None

    async def list_products(self) -> list[Product]:
        result = await self.db.execute(select(ProductRow).order_by(ProductRow.id))
        return [Product.model_validate(row) for row in result.scalars().all()]

    async def list_parties(self) -> list[Party]:
        result = await self.db.execute(select(PartyRow).order_by(PartyRow.id))
        return [Party.model_validate(row) for row in result.scalars().all()]

    async def get_company(self) -> Company:
        return self.company


class SqlDocumentStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, shipment_id: str, doc_key: DocumentKey) -> ShipmentDocument | None:
        result = await self.db.execute(
            select(ShipmentDocument)
            .where(
                ShipmentDocument.shipment_id == shipment_id,
                ShipmentDocument.doc_key == doc_key,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get(self, shipment_id: str, doc_key: DocumentKey) -> DocumentRecord | None:
        row = await self._load(shipment_id, doc_key)
        return DocumentRecord.model_validate(row) if row is not None else None

    async def list_by_shipment(self, shipment_id: str) -> list[DocumentRecord]:
        result = await self.db.execute(
            select(ShipmentDocument)
            .where(ShipmentDocument.shipment_id == shipment_id)
            .order_by(ShipmentDocument.created_at, ShipmentDocument.id)
        )
        return [DocumentRecord.model_validate(row) for row in result.scalars().all()]

    async def list_all(self) -> list[DocumentRecord]:
        result = await self.db.execute(
            select(ShipmentDocument).order_by(
                ShipmentDocument.shipment_id, ShipmentDocument.created_at, ShipmentDocument.id
            )
        )
        return [DocumentRecord.model_validate(row) for row in result.scalars().all()]

    async def put(self, record: DocumentRecord) -> DocumentRecord:
        row = await self._load(record.shipment_id, record.doc_key)
        if row is None:
            row = await self._insert(record)
        else:
            await self._update(row, record)
        return DocumentRecord.model_validate(row)

    async def put_all(self, records: list[DocumentRecord]) -> list[DocumentRecord]:
        return [await self.put(record) for record in records]

    async def _insert(self, record: DocumentRecord) -> ShipmentDocument:
        if record.revision != 0:
            raise ConcurrentModification(
                f"{record.doc_key.value} for shipment {record.shipment_id} no longer exists"
            )
        row = ShipmentDocument(
            id=record.id,
            shipment_id=record.shipment_id,
            doc_key=record.doc_key,
            status=record.status,
            current_version=record.current_version,
            versions=[_version_row(v) for v in record.versions],
        )
        self.db.add(row)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise ConcurrentModification(
                f"{record.doc_key.value} already exists for shipment {record.shipment_id}"
            ) from e
        return row

    async def _update(self, row: ShipmentDocument, record: DocumentRecord) -> None:
        if row.revision != record.revision:
            raise ConcurrentModification(
                f"{record.doc_key.value} for shipment {record.shipment_id} changed "
                f"(expected revision {record.revision}, found {row.revision})"
            )

        row.status = record.status
        row.current_version = record.current_version
        # Always dirty the parent so the revision column is bumped.
        row.updated_at = datetime.now(timezone.utc)

        stored = {v.version: v for v in row.versions}
        for version in record.versions:
            existing = stored.get(version.version)
            if existing is None:
                row.versions.append(_version_row(version))
            elif existing.note != version.note:
                existing.note = version.note

        try:
            await self.db.flush()
        except StaleDataError as e:
            raise ConcurrentModification(
                f"{record.doc_key.value} for shipment {record.shipment_id} was modified concurrently"
            ) from e


class SqlSequenceStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def next_value(self, name: str) -> int:
        row = await self.db.get(DocumentSequence, name, with_for_update=True)
        if row is None:
            row = DocumentSequence(name=name, value=0)
            self.db.add(row)
        row.value += 1
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise ConcurrentModification(f"Sequence {name} was created concurrently") from e
        logger.debug("Sequence %s advanced to %d", name, row.value)
        return row.value


def _version_row(version: DocumentVersion) -> ShipmentDocumentVersion:
    return ShipmentDocumentVersion(
        id=version.id,
        version=version.version,
        created_at=version.created_at,
        created_by=version.created_by,
        file_ref=version.file_ref,
        file_name=version.file_name,
        note=version.note,
    )
