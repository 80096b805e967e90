"""Errors raised by the document workflow.

Rules evaluation never raises for bad per-item data; every lifecycle
operation raises one of these instead of silently doing nothing.
"""


class DocumentWorkflowError(Exception):
    """Base class for all document workflow errors."""


class ShipmentNotFound(DocumentWorkflowError, LookupError):
    def __init__(self, shipment_id: str):
        super().__init__(f"Shipment {shipment_id} not found")
        self.shipment_id = shipment_id


class DocumentNotFound(DocumentWorkflowError, LookupError):
    def __init__(self, shipment_id: str, doc_key: str):
        super().__init__(f"Document {doc_key} not found for shipment {shipment_id}")
        self.shipment_id = shipment_id
        self.doc_key = doc_key


class UnsupportedDocumentKey(DocumentWorkflowError):
    def __init__(self, doc_key: str):
        super().__init__(f"Document generation not supported for {doc_key}")
        self.doc_key = doc_key


class MissingRequiredParty(DocumentWorkflowError):
    def __init__(self, party_name: str | None):
        super().__init__(f"Buyer '{party_name}' not found")
        self.party_name = party_name


class ProductNotFound(DocumentWorkflowError):
    def __init__(self, product_id: str):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class NoVersionToApprove(DocumentWorkflowError):
    def __init__(self, doc_key: str):
        super().__init__(f"Cannot approve {doc_key}: no version has been generated or uploaded")
        self.doc_key = doc_key


class VersionNotFound(DocumentWorkflowError):
    def __init__(self, doc_key: str, version: int):
        super().__init__(f"Version {version} does not exist for {doc_key}")
        self.doc_key = doc_key
        self.version = version


class InvalidStatusTransition(DocumentWorkflowError):
    pass


class RenderFailed(DocumentWorkflowError):
    def __init__(self, doc_key: str, reason: str):
        super().__init__(f"Rendering {doc_key} failed: {reason}")
        self.doc_key = doc_key
        self.reason = reason


class ConcurrentModification(DocumentWorkflowError):
    pass
