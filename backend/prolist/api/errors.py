from fastapi import HTTPException

from prolist.exceptions import (
    ConcurrentModification,
    DocumentNotFound,
    DocumentWorkflowError,
    InvalidStatusTransition,
    MissingRequiredParty,
    NoVersionToApprove,
    ProductNotFound,
    RenderFailed,
    ShipmentNotFound,
    UnsupportedDocumentKey,
    VersionNotFound,
)

_STATUS_CODES: list[tuple[type[DocumentWorkflowError], int]] = [
    (ShipmentNotFound, 404),
    (DocumentNotFound, 404),
    (VersionNotFound, 404),
    (UnsupportedDocumentKey, 422),
    (MissingRequiredParty, 422),
    (ProductNotFound, 422),
    (NoVersionToApprove, 400),
    (InvalidStatusTransition, 400),
    (ConcurrentModification, 409),
    (RenderFailed, 502),
]


def to_http_exception(error: DocumentWorkflowError) -> HTTPException:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
