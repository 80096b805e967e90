from prolist.models.base import Base, TimestampMixin
from prolist.models.audit import AuditEvent
from prolist.models.document import (
    DocumentKey,
    DocumentSequence,
    DocumentStatus,
    ShipmentDocument,
    ShipmentDocumentVersion,
)
from prolist.models.shipment import Party, Product, Shipment, ShipmentItem

__all__ = [
    "Base",
    "TimestampMixin",
    "AuditEvent",
    "DocumentKey",
    "DocumentSequence",
    "DocumentStatus",
    "ShipmentDocument",
    "ShipmentDocumentVersion",
    "Party",
    "Product",
    "Shipment",
    "ShipmentItem",
]
