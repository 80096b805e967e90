"""Static facts about each document key."""

from typing import assert_never

from prolist.models.document import DocumentKey

# Keys the system can render itself; every other key arrives by upload.
SYSTEM_RENDERABLE_KEYS = frozenset({DocumentKey.INVOICE, DocumentKey.PACKING_LIST})

# Tracked on every shipment regardless of rule outcome.
COMMERCIAL_KEYS: tuple[DocumentKey, ...] = (DocumentKey.INVOICE, DocumentKey.PACKING_LIST)


def document_label(key: DocumentKey) -> str:
    match key:
        case DocumentKey.INVOICE:
            return "Commercial Invoice"
        case DocumentKey.PACKING_LIST:
            return "Packing List"
        case DocumentKey.COO:
            return "Certificate of Origin"
        case DocumentKey.PHYTO:
            return "Phytosanitary Certificate"
        case DocumentKey.INSURANCE:
            return "Insurance Certificate"
        case DocumentKey.BILL_OF_LADING:
            return "Bill of Lading"
        case DocumentKey.CUSTOMS_EXPORT_DECLARATION:
            return "Customs Export Declaration"
        case _:
            assert_never(key)


def number_prefix(key: DocumentKey) -> str:
    """Prefix used for generated document numbers."""
    match key:
        case DocumentKey.INVOICE:
            return "INV"
        case DocumentKey.PACKING_LIST:
            return "PKL"
        case DocumentKey.COO:
            return "COO"
        case DocumentKey.PHYTO:
            return "PHY"
        case DocumentKey.INSURANCE:
            return "INS"
        case DocumentKey.BILL_OF_LADING:
            return "BOL"
        case DocumentKey.CUSTOMS_EXPORT_DECLARATION:
            return "CED"
        case _:
            assert_never(key)


def is_system_renderable(key: DocumentKey) -> bool:
    return key in SYSTEM_RENDERABLE_KEYS
