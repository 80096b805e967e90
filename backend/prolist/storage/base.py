"""Repository interfaces the document workflow depends on.

Implementations: storage.memory (tests, single process demos) and
storage.sql (SQLAlchemy async session).
"""

from typing import Protocol

from prolist.models.document import DocumentKey
from prolist.schemas.document import DocumentRecord
from prolist.schemas.shipment import Company, Party, Product, Shipment


class ShipmentRepository(Protocol):
    async def get(self, shipment_id: str) -> Shipment | None: ...

    async def list_products(self) -> list[Product]: ...

    async def list_parties(self) -> list[Party]: ...

    async def get_company(self) -> Company: ...


class DocumentStore(Protocol):
    """Document records keyed by (shipment id, document key). Never deletes.

    put() compares the record's revision with the stored one and raises
    ConcurrentModification when they differ. A record with revision 0 is
    new; putting it when the key already exists is also a conflict.
    """

    async def get(self, shipment_id: str, doc_key: DocumentKey) -> DocumentRecord | None: ...

    async def list_by_shipment(self, shipment_id: str) -> list[DocumentRecord]: ...

    async def list_all(self) -> list[DocumentRecord]: ...

    async def put(self, record: DocumentRecord) -> DocumentRecord: ...

    async def put_all(self, records: list[DocumentRecord]) -> list[DocumentRecord]: ...


class SequenceStore(Protocol):
    async def next_value(self, name: str) -> int: ...


class EventRecorder(Protocol):
    async def record(
        self,
        event_type: str,
        *,
        shipment_id: str | None = None,
        entity_id: str | None = None,
        actor: str = "system",
        data: dict | None = None,
    ) -> None: ...
