"""Pure catalogue reconciliation — no DB or storage dependency.

Makes sure a shipment has one document record per required key plus the
two commercial documents. Records are only ever added: a document that
stops being required stays tracked.
"""

from collections.abc import Iterable

from prolist.document_lifecycle.metadata import COMMERCIAL_KEYS
from prolist.ids import IdFactory, new_id
from prolist.models.document import DocumentKey, DocumentStatus
from prolist.rules_engine.rules import DEFAULT_RULES, RuleSet, evaluate
from prolist.schemas.document import DocumentRecord, RequirementSet
from prolist.schemas.shipment import Product, Shipment


def target_keys(requirements: RequirementSet) -> list[DocumentKey]:
    """Required keys plus the commercial documents, in stable enum order."""
    wanted = set(requirements.required) | set(COMMERCIAL_KEYS)
    return [key for key in DocumentKey if key in wanted]


def missing_keys(
    shipment_id: str,
    requirements: RequirementSet,
    existing_records: Iterable[DocumentRecord],
) -> list[DocumentKey]:
    present = {r.doc_key for r in existing_records if r.shipment_id == shipment_id}
    return [key for key in target_keys(requirements) if key not in present]


def new_required_record(
    shipment_id: str,
    doc_key: DocumentKey,
    id_factory: IdFactory = new_id,
) -> DocumentRecord:
    return DocumentRecord(
        id=id_factory(),
        shipment_id=shipment_id,
        doc_key=doc_key,
        status=DocumentStatus.REQUIRED,
        current_version=None,
        versions=[],
    )


def reconcile(
    shipment: Shipment,
    products: Iterable[Product],
    existing_records: Iterable[DocumentRecord],
    id_factory: IdFactory = new_id,
    rules: RuleSet = DEFAULT_RULES,
) -> tuple[list[DocumentRecord], bool]:
    """Add a `required` record for every target key the shipment lacks.

    Returns (records, created). Existing records come first, untouched and
    in their original order; new records follow in enum order. Running it
    again on its own output creates nothing.
    """
    records = [r for r in existing_records if r.shipment_id == shipment.id]
    requirements = evaluate(shipment, products, rules)

    created = [
        new_required_record(shipment.id, key, id_factory)
        for key in missing_keys(shipment.id, requirements, records)
    ]
    return records + created, bool(created)
