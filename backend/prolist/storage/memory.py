"""In-process repositories backed by plain dicts.

Used by the test suite and by anything that wants the workflow without a
database. Records are copied on the way in and out so callers can never
mutate stored state behind the store's back.
"""

from collections import defaultdict
from datetime import datetime, timezone

from prolist.exceptions import ConcurrentModification
from prolist.models.document import DocumentKey
from prolist.schemas.document import DocumentRecord
from prolist.schemas.shipment import Company, Party, Product, Shipment


class InMemoryShipmentRepository:
    def __init__(
        self,
        shipments: list[Shipment] | None = None,
        products: list[Product] | None = None,
        parties: list[Party] | None = None,
        company: Company | None = None,
    ):
        self.shipments = {s.id: s for s in shipments or []}
        self.products = list(products or [])
        self.parties = list(parties or [])
        self.company = company or Company(name="", address="", tin="")

    async def get(self, shipment_id: str) -> Shipment | None:
        shipment = self.shipments.get(shipment_id)
        return shipment.model_copy(deep=True) if shipment else None

    async def list_products(self) -> list[Product]:
        return list(self.products)

    async def list_parties(self) -> list[Party]:
        return list(self.parties)

    async def get_company(self) -> Company:
        return self.company


class InMemoryDocumentStore:
    def __init__(self, records: list[DocumentRecord] | None = None):
        self._records: dict[tuple[str, DocumentKey], DocumentRecord] = {}
        for record in records or []:
            stored = record.model_copy(deep=True, update={"revision": max(record.revision, 1)})
            self._records[(record.shipment_id, record.doc_key)] = stored

    async def get(self, shipment_id: str, doc_key: DocumentKey) -> DocumentRecord | None:
        record = self._records.get((shipment_id, doc_key))
        return record.model_copy(deep=True) if record else None

    async def list_by_shipment(self, shipment_id: str) -> list[DocumentRecord]:
        return [
            r.model_copy(deep=True) for (sid, _), r in self._records.items() if sid == shipment_id
        ]

    async def list_all(self) -> list[DocumentRecord]:
        return [r.model_copy(deep=True) for r in self._records.values()]

    async def put(self, record: DocumentRecord) -> DocumentRecord:
        key = (record.shipment_id, record.doc_key)
        existing = self._records.get(key)
        stored_revision = existing.revision if existing else 0
        if record.revision != stored_revision:
            raise ConcurrentModification(
                f"{record.doc_key.value} for shipment {record.shipment_id} changed "
                f"(expected revision {record.revision}, found {stored_revision})"
            )
        stored = record.model_copy(deep=True, update={"revision": stored_revision + 1})
        self._records[key] = stored
        return stored.model_copy(deep=True)

    async def put_all(self, records: list[DocumentRecord]) -> list[DocumentRecord]:
        return [await self.put(record) for record in records]


class InMemorySequenceStore:
    def __init__(self):
        self.values: dict[str, int] = defaultdict(int)

    async def next_value(self, name: str) -> int:
        self.values[name] += 1
        return self.values[name]


class InMemoryFileStorage:
    def __init__(self):
        self.files: dict[str, bytes] = {}
        self._saved = 0

    async def save(self, file_name: str, content: bytes) -> str:
        self._saved += 1
        file_ref = f"memory://{self._saved}/{file_name}"
        self.files[file_ref] = content
        return file_ref

    async def read(self, file_ref: str) -> bytes:
        return self.files[file_ref]

    async def delete(self, file_ref: str) -> None:
        self.files.pop(file_ref, None)


class InMemoryEventRecorder:
    def __init__(self):
        self.events: list[dict] = []

    async def record(
        self,
        event_type: str,
        *,
        shipment_id: str | None = None,
        entity_id: str | None = None,
        actor: str = "system",
        data: dict | None = None,
    ) -> None:
        self.events.append({
            "event_type": event_type,
            "shipment_id": shipment_id,
            "entity_id": entity_id,
            "actor": actor,
            "data": data or {},
            "created_at": datetime.now(timezone.utc),
        })

    def of_type(self, event_type: str) -> list[dict]:
        return [e for e in self.events if e["event_type"] == event_type]
