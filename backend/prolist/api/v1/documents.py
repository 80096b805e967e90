from fastapi import APIRouter, Depends

from prolist.dependencies import get_document_catalogue
from prolist.document_catalogue.service import DocumentCatalogueService
from prolist.document_lifecycle.status import normalize_status, status_sort_order
from prolist.models.document import DocumentStatus
from prolist.schemas.document import DocumentListResponse, DocumentRecordResponse

router = APIRouter()


@router.get("", response_model=DocumentListResponse)
async def list_all_documents(
    status: DocumentStatus | None = None,
    catalogue: DocumentCatalogueService = Depends(get_document_catalogue),
) -> DocumentListResponse:
    """List document records across all shipments, most urgent status first."""
    records = await catalogue.list_all_documents()
    if status is not None:
        target = normalize_status(status)
        records = [r for r in records if r.status == target]
    records.sort(key=lambda r: (status_sort_order(r.status), r.shipment_id, r.doc_key.value))

    return DocumentListResponse(
        documents=[DocumentRecordResponse.from_record(r) for r in records],
        total=len(records),
    )
