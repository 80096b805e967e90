"""Shipment document endpoints — requirements, catalogue and version lifecycle."""

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile

from prolist.api.errors import to_http_exception
from prolist.config import Settings
from prolist.dependencies import get_document_catalogue, get_lifecycle_manager, get_settings
from prolist.document_catalogue.service import DocumentCatalogueService
from prolist.document_lifecycle.metadata import document_label
from prolist.document_lifecycle.service import DocumentLifecycleManager
from prolist.exceptions import DocumentWorkflowError
from prolist.models.document import DocumentKey
from prolist.schemas.document import (
    DocumentCatalogueResponse,
    DocumentRecordResponse,
    GenerateDocumentRequest,
    RequirementResponse,
    RequirementSetResponse,
    SetCurrentVersionRequest,
    SetStatusRequest,
)
from prolist.storage.files import get_file_extension

router = APIRouter()


@router.get("/{shipment_id}/requirements", response_model=RequirementSetResponse)
async def get_requirements(
    shipment_id: str,
    catalogue: DocumentCatalogueService = Depends(get_document_catalogue),
) -> RequirementSetResponse:
    """Evaluate which compliance documents the shipment requires."""
    try:
        requirements = await catalogue.requirements(shipment_id)
    except DocumentWorkflowError as e:
        raise to_http_exception(e)

    keys = [key for key in DocumentKey if key in requirements.required]
    return RequirementSetResponse(
        shipment_id=shipment_id,
        requirements=[
            RequirementResponse(
                doc_key=key,
                label=document_label(key),
                reason=requirements.reasons.get(key, ""),
            )
            for key in keys
        ],
    )


@router.get("/{shipment_id}/documents", response_model=DocumentCatalogueResponse)
async def list_shipment_documents(
    shipment_id: str,
    catalogue: DocumentCatalogueService = Depends(get_document_catalogue),
) -> DocumentCatalogueResponse:
    """List the shipment's documents, creating any newly required ones."""
    try:
        records, created = await catalogue.list_documents(shipment_id)
    except DocumentWorkflowError as e:
        raise to_http_exception(e)

    return DocumentCatalogueResponse(
        shipment_id=shipment_id,
        documents=[DocumentRecordResponse.from_record(r) for r in records],
        created=created,
    )


@router.post(
    "/{shipment_id}/documents/{doc_key}/generate",
    response_model=DocumentRecordResponse,
    status_code=201,
)
async def generate_document(
    shipment_id: str,
    doc_key: DocumentKey,
    request: GenerateDocumentRequest,
    lifecycle: DocumentLifecycleManager = Depends(get_lifecycle_manager),
) -> DocumentRecordResponse:
    try:
        record = await lifecycle.generate(shipment_id, doc_key, request)
    except DocumentWorkflowError as e:
        raise to_http_exception(e)
    return DocumentRecordResponse.from_record(record)


@router.post(
    "/{shipment_id}/documents/{doc_key}/versions",
    response_model=DocumentRecordResponse,
    status_code=201,
)
async def upload_document_version(
    shipment_id: str,
    doc_key: DocumentKey,
    file: UploadFile,
    note: str | None = Form(None),
    created_by: str | None = Form(None),
    lifecycle: DocumentLifecycleManager = Depends(get_lifecycle_manager),
    settings: Settings = Depends(get_settings),
) -> DocumentRecordResponse:
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    file_ext = get_file_extension(file.filename)
    if file_ext not in settings.allowed_file_types:
        raise HTTPException(
            status_code=400,
            detail=f"File type '{file_ext}' not allowed. Allowed: {', '.join(sorted(settings.allowed_file_types))}",
        )

    content = await file.read()
    if len(content) > settings.max_upload_size_mb * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {settings.max_upload_size_mb}MB",
        )

    try:
        record = await lifecycle.upload_version(
            shipment_id, doc_key, file.filename, content, note=note, actor=created_by,
        )
    except DocumentWorkflowError as e:
        raise to_http_exception(e)
    return DocumentRecordResponse.from_record(record)


@router.post("/{shipment_id}/documents/{doc_key}/status", response_model=DocumentRecordResponse)
async def set_document_status(
    shipment_id: str,
    doc_key: DocumentKey,
    request: SetStatusRequest,
    lifecycle: DocumentLifecycleManager = Depends(get_lifecycle_manager),
) -> DocumentRecordResponse:
    """Approve, reject or otherwise move a document through review."""
    try:
        record = await lifecycle.set_status(
            shipment_id, doc_key, request.status, note=request.note, actor=request.created_by,
        )
    except DocumentWorkflowError as e:
        raise to_http_exception(e)
    return DocumentRecordResponse.from_record(record)


@router.put(
    "/{shipment_id}/documents/{doc_key}/current-version",
    response_model=DocumentRecordResponse,
)
async def set_current_version(
    shipment_id: str,
    doc_key: DocumentKey,
    request: SetCurrentVersionRequest,
    lifecycle: DocumentLifecycleManager = Depends(get_lifecycle_manager),
) -> DocumentRecordResponse:
    """Restore an earlier version as the current one."""
    try:
        record = await lifecycle.set_current_version(
            shipment_id, doc_key, request.version, actor=request.created_by,
        )
    except DocumentWorkflowError as e:
        raise to_http_exception(e)
    return DocumentRecordResponse.from_record(record)
