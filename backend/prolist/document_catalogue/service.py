"""DocumentCatalogueService — keeps each shipment's document catalogue complete.

Flow for list_documents:
1. Load the shipment and product catalogue
2. Evaluate requirements
3. Under the locks of every target key: load records, reconcile, persist new ones
4. Log an audit event when records were created
"""

import logging

from prolist.config import Settings
from prolist.document_catalogue.reconciler import reconcile, target_keys
from prolist.document_lifecycle.locks import KeyedLockRegistry
from prolist.exceptions import ShipmentNotFound
from prolist.ids import IdFactory, new_id
from prolist.rules_engine.rules import RuleSet, evaluate
from prolist.schemas.document import DocumentRecord, RequirementSet
from prolist.storage.base import DocumentStore, EventRecorder, ShipmentRepository

logger = logging.getLogger("prolist.document_catalogue")


def rules_from_settings(settings: Settings) -> RuleSet:
    return RuleSet(
        declaration_destinations=frozenset(
            code.upper() for code in settings.customs_declaration_destinations
        )
    )


class DocumentCatalogueService:
    """Requirement evaluation and catalogue reconciliation over repositories."""

    def __init__(
        self,
        settings: Settings,
        *,
        shipments: ShipmentRepository,
        documents: DocumentStore,
        events: EventRecorder,
        locks: KeyedLockRegistry,
        id_factory: IdFactory = new_id,
        rules: RuleSet | None = None,
    ):
        self.shipments = shipments
        self.documents = documents
        self.events = events
        self.locks = locks
        self.id_factory = id_factory
        self.rules = rules or rules_from_settings(settings)

    async def requirements(self, shipment_id: str) -> RequirementSet:
        shipment = await self.shipments.get(shipment_id)
        if shipment is None:
            raise ShipmentNotFound(shipment_id)
        products = await self.shipments.list_products()
        return evaluate(shipment, products, self.rules)

    async def list_documents(self, shipment_id: str) -> tuple[list[DocumentRecord], bool]:
        """Return the shipment's reconciled catalogue and whether it grew."""
        shipment = await self.shipments.get(shipment_id)
        if shipment is None:
            raise ShipmentNotFound(shipment_id)
        products = await self.shipments.list_products()
        keys = target_keys(evaluate(shipment, products, self.rules))

        async with self.locks.hold_many(shipment_id, keys):
            existing = await self.documents.list_by_shipment(shipment_id)
            records, created = reconcile(
                shipment, products, existing, self.id_factory, self.rules
            )
            if created:
                stored = await self.documents.put_all(records[len(existing):])
                records = existing + stored

        if created:
            new_keys = [r.doc_key.value for r in records[len(existing):]]
            logger.info(
                "Catalogue for shipment %s gained %d document(s): %s",
                shipment_id, len(new_keys), ", ".join(new_keys),
            )
            await self.events.record(
                "DOCUMENT_CATALOGUE_RECONCILED",
                shipment_id=shipment_id,
                data={"created": new_keys},
            )
        else:
            logger.debug("Catalogue for shipment %s already complete", shipment_id)

        return records, created

    async def list_all_documents(self) -> list[DocumentRecord]:
        return await self.documents.list_all()
